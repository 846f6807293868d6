import os
from dataclasses import dataclass, field


@dataclass
class TableauConfig:
    """Connection settings of a Tableau Server site"""
    server_url: str = ""
    admin_user: str = ""
    admin_password: str = field(default="", repr=False)
    site_id: str = ""
    api_version: str = "2.5"
    timeout: float = 30

    @classmethod
    def from_env(cls) -> "TableauConfig":
        return cls(
            server_url=os.getenv("TABLEAU_SERVER", ""),
            admin_user=os.getenv("TABLEAU_USERNAME", ""),
            admin_password=os.getenv("TABLEAU_PASSWORD", ""),
            site_id=os.getenv("TABLEAU_SITE_ID", ""),
            api_version=os.getenv("TABLEAU_API_VERSION", "2.5"),
            timeout=float(os.getenv("TABLEAU_TIMEOUT", "30"))
        )

    def is_valid(self) -> bool:
        return bool(self.server_url and self.admin_user and self.admin_password)
