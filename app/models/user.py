# app/models/user.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class Role(Base):
    __tablename__ = "roles"

    role_id = Column(Integer, primary_key=True)
    role_name = Column(String(100), nullable=False)


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True)

    # stored trimmed + lowercased, login matches on either one
    username = Column(String(30), nullable=True, index=True)
    user_email = Column(String(255), nullable=True, index=True)

    # nullable: accounts imported without a password cannot log in
    user_password = Column(String(255), nullable=True)

    user_full_name = Column(String(255), nullable=True)
    user_description = Column(Text, nullable=True)
    user_image = Column(String(255), nullable=True)

    user_role_role_id = Column(Integer, ForeignKey("roles.role_id"), nullable=True)
    role = relationship("Role")

    user_is_deleted = Column(Boolean, nullable=False, default=False)
    user_input_date = Column(DateTime(timezone=False), server_default=func.now(), nullable=True)
    user_last_update = Column(DateTime(timezone=False), nullable=True)
