import urllib.parse

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import List

from .. import schemas
from ..csv_export import csv_filename, generate_csv
from ..database import get_db
from ..estimator import Estimator
from ..report import generate_report_pdf
from ..storage import SqlStorage
from ..store import ProjectNotFound, ProjectStore

router = APIRouter(tags=["projects"])


def get_store(db: Session = Depends(get_db)) -> ProjectStore:
    return ProjectStore(SqlStorage(db))


def _load_or_404(store: ProjectStore, name: str) -> schemas.Project:
    try:
        return store.load(name)
    except ProjectNotFound:
        raise HTTPException(status_code=404, detail="Project not found")


def _attachment(filename: str) -> dict:
    """Content-Disposition header that survives non-latin-1 project names."""
    return {"Content-Disposition": f"attachment; filename*=UTF-8''{urllib.parse.quote(filename)}"}


def _csv_response(project: schemas.Project) -> Response:
    estimate = Estimator().compute_project(project)
    return Response(
        content=generate_csv(project, estimate).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers=_attachment(csv_filename(project.project_name)),
    )


@router.get("/defaults", response_model=schemas.Defaults)
def get_defaults():
    return {
        "parameters": schemas.DEFAULT_PARAMETERS,
        "room": schemas.DEFAULT_ROOM,
        "sample_rooms": schemas.SAMPLE_ROOMS,
    }


@router.post("/estimate", response_model=schemas.Estimate)
def estimate(project: schemas.Project):
    return Estimator().compute_project(project)


@router.post("/export/csv")
def export_csv(project: schemas.Project):
    """CSV of an unsaved project."""
    return _csv_response(project)


@router.get("/projects", response_model=List[str])
def list_projects(store: ProjectStore = Depends(get_store)):
    return store.list_names()


@router.post("/projects", response_model=schemas.SaveResult)
def save_project(project: schemas.Project, store: ProjectStore = Depends(get_store)):
    key = store.save(project)
    return {"ok": True, "key": key}


# Saved projects are addressed by a query parameter: names are free text and
# may contain "/"

@router.get("/projects/load", response_model=schemas.Project, response_model_by_alias=True)
def load_project(name: str = Query(...), store: ProjectStore = Depends(get_store)):
    return _load_or_404(store, name)


@router.get("/projects/estimate", response_model=schemas.Estimate)
def project_estimate(name: str = Query(...), store: ProjectStore = Depends(get_store)):
    project = _load_or_404(store, name)
    return Estimator().compute_project(project)


@router.get("/projects/csv")
def project_csv(name: str = Query(...), store: ProjectStore = Depends(get_store)):
    return _csv_response(_load_or_404(store, name))


@router.get("/projects/report")
def project_report(name: str = Query(...), store: ProjectStore = Depends(get_store)):
    """Printable PDF report of a saved project."""
    project = _load_or_404(store, name)
    estimate = Estimator().compute_project(project)
    pdf_bytes = generate_report_pdf(project, estimate)
    filename = csv_filename(project.project_name)[:-len(".csv")] + ".pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers=_attachment(filename),
    )
