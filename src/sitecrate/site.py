"""Site configuration parts and the work context that exposes them."""

from __future__ import annotations

import uuid
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from sitecrate.interfaces import WorkContext
from sitecrate.models import User

_PART_TYPES: dict[str, type[SitePart]] = {}


class SitePart(BaseModel):
    """A typed fragment of site configuration.

    Subclasses register themselves under ``part_name`` (or their class
    name) so stored settings can be rebuilt into the right type.
    """

    model_config = ConfigDict(validate_assignment=True)

    part_name: ClassVar[str] = ""

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        _PART_TYPES[cls.definition_name()] = cls

    @classmethod
    def definition_name(cls) -> str:
        return cls.__dict__.get("part_name") or cls.__name__


def site_part_type(name: str) -> type[SitePart] | None:
    """Return the registered part class for a part name, or None."""
    return _PART_TYPES.get(name)


class SiteSettingsPart(SitePart):
    """General site settings."""

    part_name: ClassVar[str] = "SiteSettingsPart"

    site_name: str = "My Site"
    base_url: str = ""
    super_user: str = "admin"
    page_title_separator: str = " - "
    page_size: int = 10
    maximum_page_size: int = 100
    site_culture: str = "en-US"
    site_time_zone: str = "UTC"
    site_salt: str = Field(default_factory=lambda: uuid.uuid4().hex, frozen=True)


class RegistrationSettingsPart(SitePart):
    part_name: ClassVar[str] = "RegistrationSettingsPart"

    users_can_register: bool = False
    users_must_validate_email: bool = False
    users_are_moderated: bool = False
    notify_moderation: bool = False
    notification_recipients: list[str] = Field(default_factory=list)


class CommentSettingsPart(SitePart):
    part_name: ClassVar[str] = "CommentSettingsPart"

    moderate_comments: bool = False
    closed_after_days: int = 0


def default_site_parts() -> list[SitePart]:
    return [SiteSettingsPart(), RegistrationSettingsPart(), CommentSettingsPart()]


class Site:
    """The current site: an ordered collection of settings parts."""

    def __init__(self, parts: list[SitePart] | None = None) -> None:
        self.parts: list[SitePart] = parts if parts is not None else default_site_parts()

    def get_part(self, name: str) -> SitePart | None:
        for part in self.parts:
            if part.definition_name() == name:
                return part
        return None


class StaticWorkContext(WorkContext):
    """Work context bound to a fixed user and site."""

    def __init__(self, user: User | None, site: Site) -> None:
        self._user = user
        self._site = site

    @property
    def current_user(self) -> User | None:
        return self._user

    @property
    def current_site(self) -> Site:
        return self._site
