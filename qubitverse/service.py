"""HTTP front end for the simulator.

Accepts a circuit in the visualizer's text notation as a ``text/plain``
POST body and answers with the plain-text report. Every request builds its
own register; nothing is shared between requests.
"""

from __future__ import annotations

import argparse
import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
import uvicorn

from .errors import SimulatorError
from .report import simulate

logger = logging.getLogger(__name__)

app = FastAPI(title="qubitverse simulator")

_backend: str = os.environ.get("QUBITVERSE_BACKEND", "serial")
_max_qubits: int = int(os.environ.get("QUBITVERSE_MAX_QUBITS", "16"))
_cors_origins: list = [
    o.strip() for o in os.environ.get("QUBITVERSE_CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()
]

# the middleware keeps a reference to this list; main() edits it in place before serving
app.add_middleware(CORSMiddleware, allow_origins=_cors_origins, allow_methods=["GET", "POST"])


@app.get("/health")
async def health():
    return {"status": "ok", "backend": _backend, "max_qubits": _max_qubits}


async def _run(body: bytes) -> PlainTextResponse:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail=f"body is not utf-8: {e}") from e
    try:
        # statevector work is CPU bound; keep it off the event loop
        report = await run_in_threadpool(simulate, text, backend=_backend, max_qubits=_max_qubits)
    except SimulatorError as e:
        logger.info("rejected circuit: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    return PlainTextResponse(report)


@app.post("/", response_class=PlainTextResponse)
async def run_root(request: Request):
    return await _run(await request.body())


@app.post("/encode", response_class=PlainTextResponse)
async def run_encode(request: Request):
    return await _run(await request.body())


def main() -> None:
    global _backend
    global _max_qubits

    parser = argparse.ArgumentParser(description="qubitverse simulator service")
    parser.add_argument("--host", default=os.environ.get("QUBITVERSE_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("QUBITVERSE_PORT", "8080")))
    parser.add_argument("--backend", default=_backend, choices=["serial", "numba"])
    parser.add_argument("--max-qubits", type=int, default=_max_qubits)
    parser.add_argument(
        "--cors-origin",
        action="append",
        default=None,
        help="allowed browser origin (repeatable); env QUBITVERSE_CORS_ORIGINS is comma-separated",
    )
    parser.add_argument("--log-level", default=os.environ.get("QUBITVERSE_LOG_LEVEL", "info"))
    args = parser.parse_args()

    _backend = args.backend
    _max_qubits = int(args.max_qubits)

    if args.cors_origin is not None:
        _cors_origins[:] = args.cors_origin

    logging.basicConfig(level=args.log_level.upper())
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
