from typing import Any, Awaitable, Callable, TypeAlias

from typing_extensions import TypeVar


I = TypeVar("I", default=Any)
O = TypeVar("O", default=Any)

# Either `async def f(x)` or a plain callable. Plain callables run in a worker
# thread and may still hand back an awaitable.
MaybeAwaitableCallable: TypeAlias = Callable[[I], Awaitable[O] | O]
