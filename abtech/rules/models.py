from pydantic import BaseModel, Field, model_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class NewsletterRules(BaseModel):
    confirm_token_ttl_hours: int = Field(gt=0)
    confirm_path: str
    confirm_subject: str
    site_name: str


class SessionRules(BaseModel):
    cookie_name: str
    algorithm: str = "HS256"
    ttl_minutes: int = Field(gt=0)


class AdminRules(BaseModel):
    admin_role: str
    editor_roles: list[str]
    signin_path: str
    protected_prefix: str = "/admin"

    @model_validator(mode="after")
    def admin_can_edit(self) -> "AdminRules":
        if self.admin_role not in self.editor_roles:
            raise ValueError("admin_role must be one of editor_roles")
        return self


class SectionsRules(BaseModel):
    help_allowed_keys: list[str]
    community_allowed_keys: list[str]


class MediaRules(BaseModel):
    list_max_results: int = Field(gt=0, le=500)


class CorsRules(BaseModel):
    allow_origins: list[str]


class Rules(BaseModel):
    project: ProjectRules
    newsletter: NewsletterRules
    sessions: SessionRules
    admin: AdminRules
    sections: SectionsRules
    media: MediaRules
    cors: CorsRules
