# api/main.py
import logging
from fastapi import FastAPI

from librarian.sa.database import get_database
from api.routes import add, books, series, users, wishlist

logger = logging.getLogger(__name__)

app = FastAPI(title="librarian")

# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    get_database().init_db()
    logger.info("Database ready")

app.include_router(books.router)
app.include_router(add.router)
app.include_router(series.router)
app.include_router(users.router)
app.include_router(wishlist.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
