# main.py

import logging
from typing import List, Optional

from fastapi import FastAPI, Depends, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

import calculator
import crud
import gharqa
import mauquf
import models
import schemas
from config import SETTINGS
from database import SessionLocal, engine
from faraid.errors import FaraidError
from faraid.rules.loader import load_rules_reference
from faraid.rules.validation import validate_language
from observability import setup_observability

logger = logging.getLogger(__name__)

# Create tables if they do not exist yet
models.Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Faraid Calculator",
    description="Islamic inheritance (faraid) distribution API: hajb, furudh, asabah, 'awl and radd."
)
setup_observability(app, SETTINGS.log_level)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Database session per request ---
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
# ------------------------------------


def _http_error(exc: FaraidError) -> HTTPException:
    if exc.status_code >= 500:
        logger.error("internal calculation error: %s", exc.message)
    return HTTPException(status_code=exc.status_code, detail=exc.to_detail())


@app.get("/")
def read_root():
    return {"message": "Welcome to the Faraid calculator"}

@app.post("/heirs/", response_model=schemas.Heir)
def create_heir_endpoint(heir: schemas.HeirCreate, db: Session = Depends(get_db)):
    """
    Add a heir type to the catalogue.
    """
    db_heir = crud.get_heir_by_code(db, code=heir.code)
    if db_heir:
        raise HTTPException(status_code=400, detail="A heir with this code already exists")
    return crud.create_heir(db=db, heir=heir)

@app.get("/heirs/", response_model=List[schemas.Heir])
def read_heirs(skip: int = 0, limit: int = 100, code: Optional[List[str]] = Query(None),
               db: Session = Depends(get_db)):
    """
    List the heir catalogue, optionally filtered by one or more codes.
    """
    if code:
        return crud.get_heirs_by_codes(db, codes=code)
    return crud.get_heirs(db, skip=skip, limit=limit)

@app.get("/rules", response_model=List[schemas.RuleReference])
def read_rules(language: str = SETTINGS.default_language):
    try:
        lang = validate_language(language)
    except FaraidError as exc:
        raise _http_error(exc)
    return load_rules_reference(lang)

@app.post("/calculate", response_model=schemas.CalculationResult)
@app.post("/calculate/", response_model=schemas.CalculationResult)
def run_calculation(calculation_data: schemas.CalculationInput):
    """
    Main endpoint: run the faraid calculation.
    """
    try:
        return calculator.calculate_inheritance(calculation_data)
    except FaraidError as exc:
        raise _http_error(exc)

@app.post("/calculate/mafqud/", response_model=schemas.MauqufResult)
def run_mafqud_calculation(mafqud_data: schemas.MafqudInput):
    try:
        return mauquf.solve_mafqud(mafqud_data)
    except FaraidError as exc:
        raise _http_error(exc)

@app.post("/calculate/khuntsa/", response_model=schemas.MauqufResult)
def run_khuntsa_calculation(khuntsa_data: schemas.KhuntsaInput):
    try:
        return mauquf.solve_khuntsa(khuntsa_data)
    except FaraidError as exc:
        raise _http_error(exc)

@app.post("/calculate/haml/", response_model=schemas.MauqufResult)
def run_haml_calculation(haml_data: schemas.HamlInput):
    try:
        return mauquf.solve_haml(haml_data)
    except FaraidError as exc:
        raise _http_error(exc)

@app.post("/calculate/gharqa/", response_model=List[schemas.GharqaResult])
def run_gharqa_calculation(gharqa_data: schemas.GharqaInput):
    """Simultaneous deaths (al-gharqa)."""
    try:
        return gharqa.solve_gharqa(gharqa_data)
    except FaraidError as exc:
        raise _http_error(exc)
