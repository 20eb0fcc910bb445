from typing import Literal

from pydantic import BaseModel, Field

from okit_boost.constants import AUTH_DEFAULT_NEXT, AUTH_ERROR_PATH, CART_STORAGE_KEY


class SiteConfig(BaseModel):
    name: str = "Okit Boost"
    base_url: str = "http://localhost:3000"
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )


class RemoteConfig(BaseModel):
    backend: Literal["remote", "memory"] = "remote"
    url: str = ""
    anon_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)


class AuthCookieConfig(BaseModel):
    name: str = "access_token"
    refresh_name: str = "refresh_token"
    verifier_name: str = "code_verifier"
    secure: bool = True
    http_only: bool = True
    same_site: Literal["lax", "strict", "none"] = "lax"


class AuthConfig(BaseModel):
    default_next: str = AUTH_DEFAULT_NEXT
    error_path: str = AUTH_ERROR_PATH
    cookie: AuthCookieConfig = Field(default_factory=AuthCookieConfig)


class CartConfig(BaseModel):
    storage_key: str = CART_STORAGE_KEY
    storage_dir: str = "~/.okit-boost"


class AppConfig(BaseModel):
    site: SiteConfig = Field(default_factory=SiteConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    cart: CartConfig = Field(default_factory=CartConfig)
