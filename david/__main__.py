import os

import uvicorn


def run() -> None:
    uvicorn.run(
        "david.main:app",
        host=os.getenv("DAVID_HOST", "127.0.0.1"),
        port=int(os.getenv("DAVID_PORT", "8000")),
        reload=os.getenv("DAVID_RELOAD", "0") in ("1", "true", "True"),
    )


if __name__ == "__main__":
    run()
