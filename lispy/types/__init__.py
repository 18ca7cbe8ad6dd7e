from lispy.types.errors import ErrorKind, LispyError, LispySyntaxError, LispyConfigError
from lispy.types.value import (
    Value,
    ValueType,
    LispError,
    Number,
    Symbol,
    Function,
    Expr,
    SExpr,
    QExpr,
)
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Builtin, Lambda, BuiltinProc
