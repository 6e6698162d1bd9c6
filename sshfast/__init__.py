"""sshfast - ssh trampoline that picks a fast agent socket and config file."""

from .schema import LaunchMode, LaunchPlan, LauncherConfig
from .registry import register_flag_grammar, get_flag_grammar, list_flag_grammars
from .argscan import find_host_arg, extract_hostname
from .matcher import MarkerScanner, ScanState, is_fast_host, scan_file
from .environ import rename_fast_agent_socket
from .pathexec import exec_from_path, iter_candidates
from .launcher import plan_launch, launch

__all__ = [
    "LaunchMode",
    "LaunchPlan",
    "LauncherConfig",
    "register_flag_grammar",
    "get_flag_grammar",
    "list_flag_grammars",
    "find_host_arg",
    "extract_hostname",
    "MarkerScanner",
    "ScanState",
    "is_fast_host",
    "scan_file",
    "rename_fast_agent_socket",
    "exec_from_path",
    "iter_candidates",
    "plan_launch",
    "launch",
]

__version__ = "0.1.0"
