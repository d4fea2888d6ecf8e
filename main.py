"""Development entrypoint: `python main.py` serves the seeder on port 8000."""

from echomatch.main import app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
