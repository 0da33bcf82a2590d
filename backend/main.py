import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tracker.config import settings
from tracker.health import router as health_router
from tracker.users.routes import router as users_router
from tracker.categories.routes import router as categories_router
from tracker.expenses.routes import router as expenses_router
from tracker.reports.routes import router as reports_router
from tracker.error_handler import exception_handler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Set log level for application modules to INFO
logging.getLogger('tracker').setLevel(logging.INFO)

# Keep external libraries at WARNING to reduce noise
logging.getLogger('uvicorn').setLevel(logging.WARNING)
logging.getLogger('uvicorn.access').setLevel(logging.WARNING)

app = FastAPI(
    title="Expense Tracker API",
    version="1.0.0",
    docs_url="/docs" if settings.ENV == "development" else None,
)

# CORS Configuration
if settings.ENV == "development":
    origins = ["http://localhost:3000", "http://localhost:5173"]  # Vite dev server
else:
    origins = [settings.WEB_APP_URL]  # Production domain

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

exception_handler(app)

app.include_router(health_router, tags=["health"])
app.include_router(users_router, prefix="/api/users", tags=["users"])
app.include_router(categories_router, prefix="/api/categories", tags=["categories"])
app.include_router(expenses_router, prefix="/api/expenses", tags=["expenses"])
app.include_router(reports_router, prefix="/api/reports", tags=["reports"])
