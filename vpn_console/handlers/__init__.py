"""Command handlers for the console bot."""

from .start_handler import StartHandler
from .session_handler import LoginHandler, LogoutHandler
from .clients_handler import (
    ClientsHandler,
    AddHandler,
    EnableHandler,
    DisableHandler,
    RenameHandler,
    ExpireHandler,
)
from .delete_handler import (
    CALLBACK_PREFIX,
    DeleteHandler,
    DeleteConfirmHandler,
)
from .config_handler import ConfigHandler
from .settings_handler import (
    SettingsHandler,
    SetPortHandler,
    SetCidrHandler,
    SetConfigHandler,
)

# Table-driven dispatch
COMMAND_HANDLERS = {
    'start': StartHandler,
    'login': LoginHandler,
    'logout': LogoutHandler,
    'clients': ClientsHandler,
    'add': AddHandler,
    'enable': EnableHandler,
    'disable': DisableHandler,
    'rename': RenameHandler,
    'expire': ExpireHandler,
    'delete': DeleteHandler,
    'config': ConfigHandler,
    'settings': SettingsHandler,
    'setport': SetPortHandler,
    'setcidr': SetCidrHandler,
    'setconfig': SetConfigHandler,
}

# Callback data pattern -> handler
CALLBACK_HANDLERS = {
    f"^{CALLBACK_PREFIX}:": DeleteConfirmHandler,
}

__all__ = [
    'COMMAND_HANDLERS',
    'CALLBACK_HANDLERS',
    'StartHandler',
    'LoginHandler',
    'LogoutHandler',
    'ClientsHandler',
    'AddHandler',
    'EnableHandler',
    'DisableHandler',
    'RenameHandler',
    'ExpireHandler',
    'DeleteHandler',
    'DeleteConfirmHandler',
    'ConfigHandler',
    'SettingsHandler',
    'SetPortHandler',
    'SetCidrHandler',
    'SetConfigHandler',
]
