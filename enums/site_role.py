from enum import Enum


class SiteRole(Enum):
    Creator = "Creator"
    Explorer = "Explorer"
    ExplorerCanPublish = "ExplorerCanPublish"
    ServerAdministrator = "ServerAdministrator"
    SiteAdministratorExplorer = "SiteAdministratorExplorer"
    SiteAdministratorCreator = "SiteAdministratorCreator"
    Unlicensed = "Unlicensed"
    ReadOnly = "ReadOnly"
    Viewer = "Viewer"
    # Roles used by pre-2018.1 servers
    Interactor = "Interactor"
    Publisher = "Publisher"
    SiteAdministrator = "SiteAdministrator"
    UnlicensedWithPublish = "UnlicensedWithPublish"
    ViewerWithPublish = "ViewerWithPublish"
