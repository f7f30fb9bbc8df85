from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fairshare.core.config import settings
from fairshare.core.logging import configure_logging
from fairshare.db.mongo import connect_to_mongo, disconnect_from_mongo
from fairshare.routes import auth, expenses, groups, income, insights, ledger, personal, settlements, stats

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Startup event: logging, then MongoDB
@app.on_event("startup")
async def startup():
    configure_logging()
    await connect_to_mongo()

# Shutdown event: Close MongoDB connection
@app.on_event("shutdown")
async def shutdown():
    await disconnect_from_mongo()

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}

@app.get("/health")
async def health():
    return {"status": "ok", "version": settings.PROJECT_VERSION}

app.include_router(auth.router)
app.include_router(groups.router)
app.include_router(expenses.router)
app.include_router(settlements.router)
app.include_router(ledger.router)
app.include_router(personal.router)
app.include_router(income.router)
app.include_router(stats.router)
app.include_router(insights.router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("fairshare.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
