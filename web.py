"""Web interface for the Humanizer scoring and rewrite engine."""

import random
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from humanizer import __version__
from humanizer.options import HumanizationLevel, WritingMode
from humanizer.rewrite.diff import render_changes
from humanizer.rewrite.rules import humanize
from humanizer.text.analyzer import text_stats
from humanizer.text.diagnosis import analyze

app = FastAPI(
    title="Humanizer",
    description="Offline heuristics for scoring AI-sounding text and rewriting it",
    version=__version__,
)


class TextRequest(BaseModel):
    """Request model for text analysis."""

    text: str
    seed: Optional[int] = None


class HumanizeRequest(BaseModel):
    """Request model for text humanization."""

    text: str
    level: HumanizationLevel = HumanizationLevel.MEDIUM
    mode: WritingMode = WritingMode.GENERAL
    seed: Optional[int] = None


class DiffRequest(BaseModel):
    original: str
    rewritten: str


class FlaggedPhraseModel(BaseModel):
    phrase: str
    reason: str


class AnalysisResponse(BaseModel):
    aiScore: int
    readabilityScore: int
    wordCount: int
    sentenceCount: int
    suggestions: List[str]
    flaggedPhrases: List[FlaggedPhraseModel]


class SegmentModel(BaseModel):
    kind: str
    text: str


class HumanizeResponse(BaseModel):
    """Response model for humanized text."""

    original: str
    humanized: str
    changes: List[SegmentModel]


class DiffResponse(BaseModel):
    changes: List[SegmentModel]


class StatsResponse(BaseModel):
    chars: int
    words: int
    sentences: int


def _require_text(text: str) -> None:
    if not text or not text.strip():
        raise HTTPException(status_code=400, detail="Text cannot be empty")


def _rng(seed: Optional[int]) -> Optional[random.Random]:
    return random.Random(seed) if seed is not None else None


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the main web interface."""
    return INDEX_HTML


@app.post("/api/analyze", response_model=AnalysisResponse)
async def analyze_text(request: TextRequest):
    """Score the provided text."""
    _require_text(request.text)
    return analyze(request.text, rng=_rng(request.seed)).to_dict()


@app.post("/api/humanize", response_model=HumanizeResponse)
async def humanize_text(request: HumanizeRequest):
    """Humanize the provided text."""
    _require_text(request.text)
    humanized = humanize(request.text, request.level, request.mode, rng=_rng(request.seed))
    changes = [segment.to_dict() for segment in render_changes(request.text, humanized)]
    return HumanizeResponse(original=request.text, humanized=humanized, changes=changes)


@app.post("/api/diff", response_model=DiffResponse)
async def diff_text(request: DiffRequest):
    """Label the runs of a rewrite, which may come from any source."""
    changes = [segment.to_dict() for segment in render_changes(request.original, request.rewritten)]
    return DiffResponse(changes=changes)


@app.get("/api/stats", response_model=StatsResponse)
async def stats(text: str = ""):
    return text_stats(text).to_dict()


INDEX_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Humanizer</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f1f5f9;
            padding: 32px 16px;
        }
        .container {
            background: white;
            border-radius: 16px;
            box-shadow: 0 10px 30px rgba(0, 0, 0, 0.08);
            max-width: 900px;
            margin: 0 auto;
            padding: 32px;
        }
        h1 { color: #1e293b; margin-bottom: 16px; }
        textarea {
            width: 100%;
            min-height: 180px;
            padding: 12px;
            border: 1px solid #cbd5e1;
            border-radius: 8px;
            font-size: 15px;
        }
        .controls { display: flex; gap: 8px; margin: 12px 0; }
        button {
            background: #4f46e5;
            color: white;
            border: none;
            border-radius: 8px;
            padding: 8px 18px;
            cursor: pointer;
        }
        #output { line-height: 1.6; white-space: pre-wrap; margin-top: 16px; }
        .added { background: #dcfce7; color: #166534; border-radius: 4px; }
        .error { color: #b91c1c; display: none; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Humanizer</h1>
        <textarea id="input" placeholder="Paste text here..."></textarea>
        <div class="controls">
            <select id="level">
                <option>Light</option><option selected>Medium</option><option>Heavy</option>
            </select>
            <select id="mode">
                <option>General</option><option>Professional</option>
            </select>
            <button id="analyzeBtn">Analyze</button>
            <button id="humanizeBtn">Humanize</button>
        </div>
        <p class="error" id="errorMsg"></p>
        <div id="output"></div>
    </div>
    <script>
        const input = document.getElementById('input');
        const output = document.getElementById('output');
        const errorMsg = document.getElementById('errorMsg');

        async function post(url, body) {
            errorMsg.style.display = 'none';
            const response = await fetch(url, {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify(body),
            });
            const data = await response.json();
            if (!response.ok) {
                throw new Error(data.detail || 'Request failed');
            }
            return data;
        }

        function showError(message) {
            errorMsg.textContent = message;
            errorMsg.style.display = 'block';
        }

        document.getElementById('analyzeBtn').addEventListener('click', async () => {
            try {
                const result = await post('/api/analyze', { text: input.value });
                const flagged = result.flaggedPhrases.map(p => p.phrase).join(', ') || 'none';
                output.textContent =
                    `AI score: ${result.aiScore}\\nReadability: ${result.readabilityScore}\\n` +
                    `Flagged: ${flagged}\\n\\n` + result.suggestions.map(s => '- ' + s).join('\\n');
            } catch (e) {
                showError(e.message);
            }
        });

        document.getElementById('humanizeBtn').addEventListener('click', async () => {
            try {
                const result = await post('/api/humanize', {
                    text: input.value,
                    level: document.getElementById('level').value,
                    mode: document.getElementById('mode').value,
                });
                output.textContent = '';
                for (const segment of result.changes) {
                    const span = document.createElement('span');
                    span.textContent = segment.text;
                    if (segment.kind === 'added') span.className = 'added';
                    output.appendChild(span);
                }
            } catch (e) {
                showError(e.message);
            }
        });
    </script>
</body>
</html>
"""


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
