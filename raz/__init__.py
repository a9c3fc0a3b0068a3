# raz interpreter
__version__ = "0.1.0"

from .errors import RazError
from .runtime import Interpreter
from .values import RazValue, RazType
import raz.runtime_statements  # Install statement executors
