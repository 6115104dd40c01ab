from fastapi import FastAPI

from gradebook.api.exceptions.handlers import register_handlers
from gradebook.api.routes.grades import router as grades_router
from gradebook.api.routes.reports import router as reports_router
from gradebook.settings import settings


app = FastAPI(title=settings.APP_NAME, version=settings.API_VERSION, debug=settings.DEBUG)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}

register_handlers(app)
app.include_router(grades_router)
app.include_router(reports_router)
