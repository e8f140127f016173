from splitcast_core.io.ledger import load_records_csv  # noqa: F401
from splitcast_core.io.config import default_app_config, load_app_config  # noqa: F401
from splitcast_core.io.store import load_state, save_state  # noqa: F401

__all__ = ["load_records_csv", "default_app_config", "load_app_config", "load_state", "save_state"]
