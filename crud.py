# crud.py

from typing import List

from sqlalchemy.orm import Session
import models
import schemas

def get_heir_by_code(db: Session, code: str):
    """
    Look up a catalogue entry by its heir type code.
    Used to refuse duplicates.
    """
    return db.query(models.Heir).filter(models.Heir.code == code).first()

def create_heir(db: Session, heir: schemas.HeirCreate):
    db_heir = models.Heir(
        code=heir.code,
        name_en=heir.name_en,
        name_ar=heir.name_ar,
        max_count=heir.max_count,
    )
    db.add(db_heir)
    db.commit()
    db.refresh(db_heir)
    return db_heir

def get_heirs(db: Session, skip: int = 0, limit: int = 100):
    """
    List the catalogue. 'skip' and 'limit' paginate.
    """
    return db.query(models.Heir).offset(skip).limit(limit).all()

def get_heirs_by_codes(db: Session, codes: List[str]):
    return db.query(models.Heir).filter(models.Heir.code.in_(codes)).all()
