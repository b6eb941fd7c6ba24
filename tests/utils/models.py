"""Declarative models used across the test suite."""

from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from has_easy import HasEasyMixin, ValidationError, has_easy


class Base(DeclarativeBase):
    pass


class Client(HasEasyMixin, Base):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50), default="")


class User(HasEasyMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50), default="")
    client_id: Mapped[Optional[int]] = mapped_column(ForeignKey("clients.id"), nullable=True)
    client: Mapped[Optional[Client]] = relationship()

    def default_signature(self):
        return f"-- {self.name}"

    def check_nickname(self, value):
        if value == "root":
            raise ValidationError("is reserved")
        if len(value) < 3:
            return ["is too short", "must be at least 3 characters"]
        return True


with has_easy(Client, "preferences") as p:
    p.define("theme", default="light")
    p.define("color", default="red")


with has_easy(User, "preferences", aliases=["prefs"]) as p:
    p.define("color", default="red", type_check=str, validate=["red", "blue", "green"])
    p.define("theme", default_through="client")
    p.define("greeting", default_dynamic=lambda user: f"Hello {user.name}")
    p.define("signature", default_dynamic="default_signature")
    p.define("dollars", type_check=[int])
    p.define("age", type_check=int, validate=lambda v: v >= 0)
    p.define("nickname", type_check=str, validate="check_nickname")
    p.define("tags", default=[], type_check=list)
    p.define("settings", type_check=[dict, "none"])
    p.define(
        "email",
        type_check=str,
        preprocess=lambda v: v.strip().lower(),
        postprocess=lambda v: f"<{v}>" if v else v,
    )


with has_easy(User, "flags") as f:
    f.define("admin", default=False, type_check=bool)
    f.define("beta")


class Gadget(HasEasyMixin, Base):
    __tablename__ = "gadgets"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50), default="")


class Sensor(HasEasyMixin, Base):
    __tablename__ = "sensors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50), default="")


with has_easy(Gadget, "specs") as s:
    s.define("pair", type_check=tuple)
    s.define("price")


# Both defaults fail their own rules
with has_easy(Sensor, "limits") as s:
    s.define("level", default=5, validate=[1, 2])
    s.define("label", default_dynamic=lambda sensor: sensor.name, validate=lambda v: len(v) > 0)
    s.define("unit", type_check=str)
