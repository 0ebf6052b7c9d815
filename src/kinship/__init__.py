"""
Kinship Runtime Object Model

Classes, traits and namespaces declared at runtime through explicit
member tables, with single inheritance, trait composition, operator
metamethods and detached super views of instances.
"""

__version__ = "0.1.0"


from ._error import *
from ._meta import *
from ._entity import *
from ._scope import *
from ._trait import *
from ._class import *
from ._instance import *
from ._namespace import *
