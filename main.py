import uvicorn


def run_backend():
    uvicorn.run(
        "files_manager.main:app",
        host="0.0.0.0",
        port=5000,
        reload=False
    )


if __name__ == "__main__":
    run_backend()
