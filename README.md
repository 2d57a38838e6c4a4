# sparrowwire

Building blocks for a small MySQL-compatible database server. The package uses only the standard library.

- **Wire protocol** (`message`, `response`, `packet`, `request`, `codec`, `column`, `types`). Builds server packets: handshake, auth switch, OK, ERR, EOF, column count, column definitions, text rows and the first COM_STMT_PREPARE response. Frames packets with a length and a sequence id. Reads the fields of client requests. Decodes length-encoded integers and strings and the bound parameters of `COM_STMT_EXECUTE`.
- **Storage key layout** (`keys`, `names`). Builds the string keys under which row ids, column values and index entries are kept in an ordered key-value store.
- **Scan planning** (`ranges`, `seek`). Turns filter expressions into column ranges, picks the best matching unique or primary index, and produces the start and end keys of the scan.
- **Store and variables** (`store`, `variables`). Provides the `MemoryStoreEngine` key-value store, helpers that line up column names with values, and lookup of system and user-defined variables.
- **Statements** (`statement`). Renders `CreateTable` as SQL text.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building packets

```python
from sparrowwire.message import handshake_message, ok_message, error_message
from sparrowwire.packet import PacketSequence
from sparrowwire.types import StatusFlags

seq = PacketSequence()
frame = seq.frame(handshake_message())   # 3-byte length + sequence id + payload
seq.increase()

ok = ok_message(1, 0, StatusFlags.SERVER_STATUS_AUTOCOMMIT, 0, "success")
wire = seq.frame(ok)
seq.reset()

err = error_message(1105, "HY000", "Unknown error")
```

Column definitions come from `sparrowwire.column`:

```python
from sparrowwire.column import Field, column_from_field
from sparrowwire.types import DataType

column = column_from_field(Field("id", DataType.INT64, nullable=False))
payload = column.to_response_payload(False)
```

`ResponsePayload.dump_text_row` writes `str`, `int` and `float` values and writes `None` as SQL NULL. For any other type it raises `TypeError`.

## Reading requests

```python
from sparrowwire.request import RequestPayload
from sparrowwire.codec import parse_length_encoded_int

req = RequestPayload(b"\x09\x00\x00\x00\x03select 1")
req.command_id()     # 3
req.packet_type()    # PacketType.COM_QUERY
req.query_sql()      # b"select 1"

parse_length_encoded_int(b"\xfc\x00\x01")   # (3, 256)
```

`packet_type()` raises `MysqlError` for command bytes it does not know. `parse_stmt_execute_args` raises `MysqlError` for malformed or unsupported parameters.

## Storage keys and scans

```python
from sparrowwire.names import to_object_name
from sparrowwire.keys import create_column_key, create_column_rowid_key

table = to_object_name("db.users")
create_column_rowid_key(table, "abc")    # "/Table/rowid/db.users/abc"
create_column_key(table, 2, "abc")       # "/Table/index/column/db.users/2/abc"
```

`get_seek_prefix` returns a `FullTableScan` or an `IndexScan`. It takes the table's constraints, the store id of each column and the filters:

```python
from sparrowwire.ranges import BinaryExpr, ColumnRef, LiteralExpr, Operator, UniqueConstraint
from sparrowwire.seek import get_seek_prefix

scan = get_seek_prefix(
    table,
    [UniqueConstraint("PRIMARY", ["id"], is_primary=True)],
    {"id": 1},
    [BinaryExpr(ColumnRef("id"), Operator.EQ, LiteralExpr(7))],
)
scan.start.key   # "/Table/index/key/db.users/PRIMARY/1/1/7/"
```

## Variables

```python
from sparrowwire.variables import SystemVariables, UserDefinedVariables

system = SystemVariables({"version": "8.0"}, "0.1.0")
system.get_value(["@@version"])          # "8.0"
system.get_value(["@@unknown"])          # "0.1.0-@@unknown"
UserDefinedVariables().get_value(["@a"]) # "user-defined-var-@a"
```

## Errors

Protocol and storage failures raise `sparrowwire.errors.MysqlError`, which carries `error_number`, `sql_state` and `message`. `global_error(number, message)` builds one with SQLSTATE `HY000`. The key parsers `parse_record_rowid` and `parse_record_column` raise `ValueError` for malformed keys.

## What this package does not do

The package does not include a network server. It does not accept connections, run the handshake over a socket, parse or execute SQL queries, or read rows back into result sets. The only store it provides is `MemoryStoreEngine`, which keeps everything in memory and keeps nothing on disk. You supply those parts and drive them with the functions above.