# apex/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .database import engine
from . import models
from .api import reports, documents

# Create all tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Apex API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify the frontend URL
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reports.router)
app.include_router(documents.router)

@app.get("/")
async def root():
    return {"message": "Apex API is running"}
