from .bootstrap import bootstrap_app
from .container import AppConfig, AppContainer, create_container

__all__ = ["AppConfig", "AppContainer", "bootstrap_app", "create_container"]
