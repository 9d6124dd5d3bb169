from .main import apply, apply_local, as_accessor, check, check_local, evaluate, get_function_value
from .tree import ExpressionType, ModifierType, Node, NodeType, Param, Tree
from .object import Function, Instance, Predicate
from .state import LocalState
from .accessor import LocalAccessor, ProblemClient, RemoteAccessor, StateAccessor
from .evaluator import DIVISION_EPSILON, Evaluator, Result
from . import formula
from . import grounding
from . import utils
