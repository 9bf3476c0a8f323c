"""Script rule layer — user-supplied Python rules.

INVARIANT: A file that fails the security gate is never imported, and one
broken rule never stops the rest of the batch.
"""

from theshit.plugins.engine import PythonScriptEngine, get_script_engine
from theshit.plugins.loader import ScriptRule, ScriptRuleLoader, discover_rule_files

__all__ = [
    "PythonScriptEngine",
    "ScriptRule",
    "ScriptRuleLoader",
    "discover_rule_files",
    "get_script_engine",
]
