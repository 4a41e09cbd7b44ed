"""Run the API with uvicorn on the configured port: python -m routesaver."""

import uvicorn

from routesaver.config import get_settings


def main() -> None:
    uvicorn.run("routesaver.main:app", host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    main()
