from sqlalchemy import Integer, String, Boolean, DateTime, ForeignKey, func, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from learning_assistant.db.base_class import Base
from typing import List, Optional, TYPE_CHECKING
from datetime import datetime
import enum

if TYPE_CHECKING:
    from .achievement_model import Achievement
    from ..assessment.response_model import Response
    from ..progress.user_progress_model import UserProgress
    from ..learning.learning_plan_model import LearningPlan


class AuthProvider(str, enum.Enum):
    PASSWORD = "password"
    OAUTH = "oauth"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_superuser: Mapped[bool] = mapped_column(Boolean, default=False)
    auth_provider: Mapped[AuthProvider] = mapped_column(
        Enum(AuthProvider, name="authprovider", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=AuthProvider.PASSWORD,
        server_default=AuthProvider.PASSWORD.value,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # --- Relations ---
    profile: Mapped[Optional["Profile"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", uselist=False
    )
    responses: Mapped[List["Response"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    progress_entries: Mapped[List["UserProgress"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    learning_plans: Mapped[List["LearningPlan"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    achievements: Mapped[List["Achievement"]] = relationship(back_populates="user", cascade="all, delete-orphan")

    @property
    def display_name(self) -> str:
        if self.profile is not None and self.profile.full_name:
            return self.profile.full_name
        return self.email

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class Profile(Base):
    """Informations publiques de l'utilisateur (nom affiché, avatar)."""
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user: Mapped["User"] = relationship(back_populates="profile")
