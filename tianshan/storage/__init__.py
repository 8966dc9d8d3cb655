"""File-based storage for the game shell.

Data layout:
  data/
    config.json      App settings (store keys, player placeholder, match thresholds)
    variables.json   Variable store: the save document (JSON text under
                     "gameData") and the last player action ("lastMessage_jxz")

Config: get_config() returns defaults merged with stored values.
update_config() applies partial updates; thresholds merge axis by axis.

Save: load_or_init_game_data() merges the stored document against
DEFAULT_GAME_DATA and writes it back when fields were added.
"""

# Re-export all public symbols so `from tianshan import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    variables_path,
)

from .config import (  # noqa: F401
    default_config,
    get_config,
    update_config,
)

from .variables import (  # noqa: F401
    FileVariableStore,
    MemoryVariableStore,
    StoreUnavailable,
    VariableStore,
)

from .save import (  # noqa: F401
    DEFAULT_GAME_DATA,
    LAST_MESSAGE_KEY,
    SAVE_KEY,
    load_or_init_game_data,
    merge_with_defaults,
    new_game_data,
    save_game_data,
    save_last_message,
)
