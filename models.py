# models.py

from sqlalchemy import Column, Integer, String
from database import Base

# Heir catalogue table, one row per HeirType
class Heir(Base):
    __tablename__ = "heirs"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, index=True)  # HeirType value, e.g. "Full Brother"
    name_en = Column(String, nullable=False)
    name_ar = Column(String, nullable=False)
    max_count = Column(Integer, nullable=False, default=1)
