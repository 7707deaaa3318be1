"""Allow `python -m gpusnap`."""

from gpusnap.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
