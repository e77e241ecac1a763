"""Entry point: ``python -m camoufox_snapshot``."""

from camoufox_snapshot.server import run_server

if __name__ == "__main__":
    run_server()
