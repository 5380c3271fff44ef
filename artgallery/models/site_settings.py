from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SiteSettings(BaseModel):
    """
    Storefront-wide settings edited from the admin panel.

    Stored as a single row (id 1) in the remote ``site_settings`` table,
    whose columns use camelCase names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    site_name: str = "Art Gallery"
    site_description: str = "Online art gallery and marketplace"
    contact_email: str = "contact@example.com"
    featured_artworks_count: int = Field(default=6, ge=1, le=12)
    enable_sales: bool = True
    enable_user_registration: bool = True
    maintenance_mode: bool = False
