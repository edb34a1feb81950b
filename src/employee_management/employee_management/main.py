from __future__ import annotations

import os

from . import create_app

app = create_app()


def main() -> None:
    port = int(os.getenv("PORT", "5000"))
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=port, debug=bool(app.config.get("DEBUG", False)))


if __name__ == "__main__":
    main()
