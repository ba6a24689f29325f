"""
Minimal programmable transaction builder.

Records inputs and commands as plain data in the shape Sui uses for
programmable transactions. It does not serialize to BCS or sign; it exists so
that helpers like ``get_coin_of_value`` can compose fragments which the
caller then hands to a full SDK or inspects with ``to_dict()``.
"""
from typing import Any
from typing import Dict
from typing import List
from typing import Sequence
from typing import Union


Argument = Dict[str, Any]

GAS_COIN: Argument = {'GasCoin': True}


class TransactionResult(dict):
    """
    Argument referring to the output of a command in this transaction.

    Indexing yields the nested result, e.g. ``result[0]`` is the first coin
    produced by a ``SplitCoins`` command.
    """

    def __init__(self, index: int, count: int = 1):
        super().__init__(Result=index)
        self.index = index
        self.count = count

    def __getitem__(self, item):
        if isinstance(item, int):
            if not 0 <= item < self.count:
                raise IndexError(f'result {self.index} has {self.count} values')
            return {'NestedResult': [self.index, item]}
        return super().__getitem__(item)


class TransactionBlock(object):
    """Accumulates the inputs and commands of one programmable transaction."""

    def __init__(self):
        self._inputs: List[Dict[str, Any]] = []
        self._object_inputs: Dict[str, int] = {}
        self._commands: List[Dict[str, Any]] = []

    @property
    def gas(self) -> Argument:
        return GAS_COIN

    @property
    def inputs(self) -> List[Dict[str, Any]]:
        return list(self._inputs)

    @property
    def commands(self) -> List[Dict[str, Any]]:
        return list(self._commands)

    def pure(self, value: Any) -> Argument:
        self._inputs.append({'type': 'pure', 'value': value})
        return {'Input': len(self._inputs) - 1}

    def object(self, object_id: str) -> Argument:
        """
        Reference an object by id. Repeated ids reuse the same input.
        """
        if object_id not in self._object_inputs:
            self._inputs.append({'type': 'object', 'objectId': object_id})
            self._object_inputs[object_id] = len(self._inputs) - 1
        return {'Input': self._object_inputs[object_id]}

    def _as_argument(self, value: Union[str, Argument]) -> Argument:
        if isinstance(value, str):
            return self.object(value)
        return value

    def split_coins(self, coin: Union[str, Argument], amounts: Sequence[Argument]) -> TransactionResult:
        if not amounts:
            raise ValueError('split_coins needs at least one amount')
        self._commands.append({
            'SplitCoins': [self._as_argument(coin), list(amounts)],
        })
        return TransactionResult(len(self._commands) - 1, count=len(amounts))

    def merge_coins(
        self,
        destination: Union[str, Argument],
        sources: Sequence[Union[str, Argument]],
    ) -> TransactionResult:
        if not sources:
            raise ValueError('merge_coins needs at least one source coin')
        self._commands.append({
            'MergeCoins': [
                self._as_argument(destination),
                [self._as_argument(source) for source in sources],
            ],
        })
        return TransactionResult(len(self._commands) - 1, count=0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'inputs': self.inputs,
            'commands': self.commands,
        }
