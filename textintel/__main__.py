# textintel/__main__.py
"""Serves the API with uvicorn: `python -m textintel`."""
import uvicorn

from .config import get_cfg


def main():
    server = get_cfg()["server"]
    uvicorn.run("textintel.main:app", host=server["host"], port=int(server["port"]))


if __name__ == "__main__":
    main()
