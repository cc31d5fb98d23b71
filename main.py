"""Entry point de desarrollo (sin instalar el paquete).

Permite ejecutar el reto con:
- `python main.py` (equivale a `run`)
- `python main.py select-query REG12347`

Motivo:
- El código vive en `src/` (layout tipo "src"), así que sin un editable
  install Python no encuentra `cli`, `core`, etc.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import main as cli_main  # noqa: PLC0415

    cli_main()


if __name__ == "__main__":
    main()
