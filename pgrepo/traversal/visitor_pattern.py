from typing import Any
from pgrepo.abstract_syntax_tree.models import ASTNode

class Visitor:
    """
    A base class for traversing predicate and statement nodes.
    """
    def visit(self, node: ASTNode) -> Any:
        """
        The entry point for visiting a node. Dispatches to the correct visit method.
        """
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> Any:
        """
        Called if no explicit visit method exists for a node type.
        """
        raise NotImplementedError(f"No visit_{node.__class__.__name__} method defined in {self.__class__.__name__}")
