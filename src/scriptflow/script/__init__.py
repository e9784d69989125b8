"""Runtime script models and the fallback script.

The loader lives in ``scriptflow.script.loader``; it depends on the compiler
and is not re-exported here.
"""

from scriptflow.script.fallback import default_script
from scriptflow.script.models import RuntimeNode, RuntimeOption, RuntimeScript

__all__ = ["RuntimeNode", "RuntimeOption", "RuntimeScript", "default_script"]
