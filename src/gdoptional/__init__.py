"""gdoptional: Option, Result, Error and TimedVar value types for game scripting.

Flat imports (preferred):
    from gdoptional import Option, Some, Nothing, Result, Ok, Err
    from gdoptional import Error, ErrorKind, HostError, ReportLevel
    from gdoptional import TimedVar, EnumStruct, EnumDict

Submodule imports (for organization):
    from gdoptional.option import Option
    from gdoptional.result import Ok, Err
    from gdoptional.files import open_file, parse_json_file
"""

from gdoptional._config import Config, get_config, init
from gdoptional._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)
from gdoptional._panic import Panic
from gdoptional.enum_struct import (
    EnumDict,
    EnumDictBuilder,
    EnumStruct,
    EnumStructBuilder,
    EnumVariant,
)
from gdoptional.error import (
    CUSTOM_KIND_START,
    Error,
    ErrorBuilder,
    ErrorKind,
    HostError,
    ReportLevel,
    is_gderror,
    kind_name,
)
from gdoptional.files import open_file, parse_json_file
from gdoptional.option import Nothing, Option, Some
from gdoptional.result import Err, Ok, Result, collect
from gdoptional.timed_var import TimedVar

__all__ = [
    'CUSTOM_KIND_START',
    # Configuration
    'Config',
    # Enum catalogues
    'EnumDict',
    'EnumDictBuilder',
    'EnumStruct',
    'EnumStructBuilder',
    'EnumVariant',
    # Result types
    'Err',
    # Errors
    'Error',
    'ErrorBuilder',
    'ErrorKind',
    'HostError',
    # Option types
    'Nothing',
    'Ok',
    'Option',
    # Panics
    'Panic',
    'ReportLevel',
    'Result',
    'Some',
    # Timed values
    'TimedVar',
    # Logging
    'add_log_hook',
    'clear_log_hooks',
    'collect',
    'configure_logging',
    'get_config',
    'get_logger',
    'init',
    'is_gderror',
    'kind_name',
    # File helpers
    'open_file',
    'parse_json_file',
    'remove_log_hook',
]
