# app/models/ppdb.py
from sqlalchemy import Column, Integer, String

from app.db.base import Base


class PPDBParticipant(Base):
    """New-student admission (PPDB) applicant."""

    __tablename__ = "ppdb_participant"

    id = Column(Integer, primary_key=True)
    nisn = Column(String(30), nullable=True, index=True)
    nama_peserta = Column(String(255), nullable=True)
    password = Column(String(255), nullable=True)
    no_pendaftaran = Column(String(50), nullable=True)
    status = Column(String(30), nullable=True)
    ppdb_status = Column(String(30), nullable=True)
