from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .api.routes import rdw

BASE_DIR = Path(__file__).resolve().parent

app = FastAPI(
    title="Kenteken Zoeker",
    version="0.1.0",
    description="Look up Dutch vehicles in the RDW open data registry by exact plate or plate fragments.",
)

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

# ---- Static files (CSS + JS) ----

app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/ui")


@app.get("/health", tags=["health"])
def health_check():
    """
    Basic health check endpoint used for monitoring and deployment.
    """
    return JSONResponse(content={"status": "ok"})


# ---- API Routers ----

app.include_router(
    rdw.router,
    prefix="/api/rdw",
    tags=["rdw"],
)


@app.get("/ui", response_class=HTMLResponse, tags=["ui"])
async def ui_home(request: Request):
    return templates.TemplateResponse(request, "ui/index.html", {"page_title": "Kenteken Zoeker"})
