#!/usr/bin/env python3
from savedlinks_components.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
