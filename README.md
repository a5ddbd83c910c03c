# fe_analyzer

Building blocks for semantic analysis of Fe, a statically typed language for
smart contracts. The package models Fe's type system, name scopes, event
definitions, ABI naming and the context that an analyzer attaches to syntax
tree nodes.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## What is inside

- `fe_analyzer.types`: the type model. It covers `Integer` (`U8` to `U256` and
  `I8` to `I256`), `Primitive` (`BOOL`, `BYTE`, `ADDRESS`, `UNIT`), `Array`,
  `Map`, `Tuple`, `FeString`, `Contract`, `Struct` and `FunctionAttributes`.
  It also has helpers such as `byte_size`, `is_fixed_size`, `to_fixed_size`,
  `is_unit`, `is_signed_integer`, `as_int` and the range bounds `u256_min()`,
  `u256_max()`, `i256_min()` and `i256_max()`. `Integer.fits` checks whether a
  Python `int` lies in a type's range.
- `fe_analyzer.abi`: ABI names and shapes of types. It provides `abi_json_name`,
  `abi_selector_name`, `abi_components`, `abi_type` and `lower_snake`, and the
  records `AbiUint`, `AbiUintSize`, `AbiArray`, `AbiTuple` and `AbiComponent`.
- `fe_analyzer.operations`: type checking of indexing and binary operators,
  through `index` and `bin_op` with a `BinOperator`.
- `fe_analyzer.events`: `EventDef`, which computes the Keccak-256 topic of an
  event signature, and `keccak_hex`.
- `fe_analyzer.scopes`: `ModuleScope`, `ContractScope` and `BlockScope`, which
  handle name lookup and duplicate detection. A duplicate raises
  `AlreadyDefined`.
- `fe_analyzer.context`: `Context`, which records the attributes of
  expressions, emits, functions, declarations, contracts, calls, events and
  type descriptions by node id, and collects diagnostics. It also holds
  `Location`, `ExpressionAttributes`, `ContractAttributes`, `ModuleAttributes`
  and the call kinds `BuiltinFunction`, `TypeConstructor`, `SelfAttribute`,
  `ValueAttribute` and `TypeAttribute`.
- `fe_analyzer.builtins`: enums naming the built-in objects, fields and
  methods, and `parse_builtin` to look one up by its spelling.
- `fe_analyzer.errors`: `SemanticError` with its `ErrorKind`, `AlreadyDefined`,
  `CannotMove`, `AnalyzerError`, and the diagnostic records `Span`, `Label`,
  `Severity` and `Diagnostic`.

## Example

```python
from fe_analyzer.types import Integer, Primitive
from fe_analyzer.operations import BinOperator, bin_op
from fe_analyzer.errors import SemanticError

u256 = Integer.U256
print(bin_op(u256, BinOperator.ADD, u256))   # u256

try:
    bin_op(u256, BinOperator.ADD, Primitive.BOOL)
except SemanticError as err:
    print(err.kind)                          # ErrorKind.TYPE_ERROR
```

Scopes resolve names through their parents:

```python
from fe_analyzer.scopes import ModuleScope, ContractScope, BlockScope, BlockScopeType
from fe_analyzer.types import Primitive

module = ModuleScope()
contract = ContractScope("Foo", module)
body = BlockScope.from_contract_scope("bar", contract)
inner = BlockScope.from_block_scope(BlockScopeType.IF_ELSE, body)

body.add_var("flag", Primitive.BOOL)
assert inner.get_variable_def("flag") is Primitive.BOOL
assert inner.function_scope() is body
```

## What it does not do

The package has no parser and no analysis pass of its own. It does not read
Fe source files or walk a syntax tree, and it has no command to run. A caller
that builds the syntax tree fills the scopes and the `Context` itself, using
its own node ids and spans.