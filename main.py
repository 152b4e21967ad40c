"""Run the gift message lookup API under uvicorn (`python main.py`)."""
import os
from gift_lookup.main import app

def main():
    import uvicorn
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))
    uvicorn.run(app, host=host, port=port)

if __name__ == "__main__":
    main()
