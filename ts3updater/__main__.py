from __future__ import annotations

from ts3updater.main import main

if __name__ == "__main__":
    raise SystemExit(main())
