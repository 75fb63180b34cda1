# Common utilities
from .config_loader import load_app_session, load_config, load_settings
from .csv_utils import configure_csv, next_available_path, read_table, write_csv
from .log_config import setup_logging
from .cli_utils import add_common_arguments, print_stage_report, session_from_args

__all__ = [
    'load_app_session',
    'load_config',
    'load_settings',
    'configure_csv',
    'next_available_path',
    'read_table',
    'write_csv',
    'setup_logging',
    'add_common_arguments',
    'print_stage_report',
    'session_from_args',
]
