"""
MCP Server de clima espacial NOAA SWPC.

Expõe índice Kp, fluxo de raios X, vento solar e alertas como tools MCP,
com cache em memória para poupar a API da NOAA, e analisa as condições
de propagação HF para radioamadores.

Modo stdio (default), para clientes MCP locais:
  .venv/bin/python mcp_server.py

Modo HTTP (rotas /mcp, /health e /stats):
  python mcp_server.py --transport streamable-http --port 3000
"""

import sys
from pathlib import Path

_BASE = Path(__file__).parent
sys.path.insert(0, str(_BASE / "src"))

from noaa_space_weather.server import main  # noqa: E402

if __name__ == "__main__":
    main()
