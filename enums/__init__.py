from .site_role import SiteRole

__all__ = [
    'SiteRole'
]
