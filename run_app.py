import asyncio
import logging
import os
import socket
import webbrowser
from contextlib import closing

import uvicorn

from resume_tailor import config as cfg
from resume_tailor.main import app

logger = logging.getLogger("resume_tailor.launcher")

HOST = "127.0.0.1"
PREFERRED_PORT = int(os.getenv("RESUME_TAILOR_PORT", "8000"))
OPEN_BROWSER = os.getenv("RESUME_TAILOR_NO_BROWSER", "") == ""


def _pick_port(preferred: int) -> int:
	# Preferred port if free, else whatever the OS hands out
	for candidate in (preferred, 0):
		with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
			try:
				s.bind((HOST, candidate))
			except OSError:
				logger.info("launcher: port %d busy", candidate)
				continue
			return s.getsockname()[1]
	raise RuntimeError("no free port available")


def _landing_url(port: int) -> str:
	base = f"http://{HOST}:{port}"
	return base if cfg.OPENAI_API_KEY else f"{base}/setup"


async def _open_when_ready(server: uvicorn.Server, url: str) -> None:
	while not server.started:
		await asyncio.sleep(0.2)
	webbrowser.open(url)


async def _serve() -> None:
	port = _pick_port(PREFERRED_PORT)
	url = _landing_url(port)
	server = uvicorn.Server(uvicorn.Config(app=app, host=HOST, port=port, log_level="info"))
	if OPEN_BROWSER:
		asyncio.create_task(_open_when_ready(server, url))
	logger.info("launcher: serving %s", url)
	await server.serve()


def main() -> None:
	asyncio.run(_serve())


if __name__ == "__main__":
	main()
