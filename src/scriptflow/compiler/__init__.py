"""Graph-to-script compiler."""

from scriptflow.compiler.ports import PortStrategyRegistry, output_ports
from scriptflow.compiler.script_compiler import FINISH_NODE_ID, compile_builder, compile_script

__all__ = [
    "FINISH_NODE_ID",
    "PortStrategyRegistry",
    "compile_builder",
    "compile_script",
    "output_ports",
]
