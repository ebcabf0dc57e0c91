import uvicorn


def main() -> None:
    """Run the RequestGate demo application with uvicorn."""
    uvicorn.run(
        "requestgate.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
