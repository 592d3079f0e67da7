# dokit

Small helpers for everyday Python code. They cover collections, joins, pipelines, dependency injection, expiring maps, signed tokens, HTTP requests and DB-API queries.

## Installation

```
pip install dokit
```

To run the test suite:

```
pip install "dokit[test]"
pytest
```

## Modules

- `dokit.grid`
  - `rectangle(m, n, *initial)` builds an `m` by `n` list of lists. If you pass fewer than `n` initial values, every cell gets the first one. If you pass exactly `n`, column `j` gets value `j`. Otherwise every cell is `0`.
  - `square(n, *initial)` builds an `n` by `n` grid the same way.
- `dokit.values`
  - `equal` compares two values.
  - `is_zero` is true for `None`, false, zero and empty values, and for dataclass instances whose fields are all zero.
  - `coalesce` returns the first non-zero argument. If every argument is zero it returns the last one.
  - `EnumItem` is a frozen name/value pair.
- `dokit.numbers`
  - Digits: `split_uint`, `join_uint` and `pow10`. These wrap at 64 bits.
  - Decimal rounding: `round_to` rounds halves away from zero. `floor_to` and `ceil_to` are also here.
  - `factorial` returns 0 above 20. `factorial_big` returns the result as a string.
  - `bin_pow` wraps at signed 64 bits. `bin_pow_big` returns the result as a string.
- `dokit.mapping`
  - Grouping and keying: `key_value_group_by`, `key_value_by`, `key_by`, `keys`, `values` and `merge_key_value`.
  - Converting items: `map_from(items, factory)`, and `map_to(items)`, which calls each item's `to()`.
  - Joins: `nested_join`, and `hash_join`, which maps unmatched left items with `None`.
- `dokit.errors`
  - `must(err)` raises `InnerError(RawError(err))` when `err` is not `None`. The message is `raw error: ...`.
  - `must_values(*values, err)` raises the same way, or returns the values without the error.
  - `log_error` and `log_values` log the error instead of raising.
  - `ignore_last` drops the last argument.
  - `match_error` and `convert_error` recognise errors raised by `must`.
- `dokit.netutil`
  - `is_valid_ip` accepts IPv4 and IPv6 addresses, including IPv6 zones.
  - `mkdir_all_if_not_exist` creates a directory and its parents.
- `dokit.sqlcond`
  - `field_with_alias` prefixes a field with a table alias.
  - `with_where` returns `cond(field, value)` unless the value is zero. A value with an `is_zero()` method decides for itself.
- `dokit.printf`
  - `check_printf(text)` returns `(is_format, argument_count)` for a printf-style string.
- `dokit.escape`
  - `escape_struct(obj, escaper)` escapes the fields of a dataclass instance in place. It recurses into nested dataclasses and into lists or tuples of them.
  - The escapers are `xml_escaper` and `html_escaper`.
- `dokit.pipeline`
  - `pipe` and `pipes` run three steps in order.
  - `event(ctx, param, do, success, failed)` passes the result to `success`, or the exception to `failed`.
  - `EventLoop(ctx, size)` runs queued `EventEntity` objects on a background thread. Use `send()` to queue one and `stop()` to end the loop; `send` after `stop` raises `RuntimeError`. The loop can also be used as a context manager.
- `dokit.safecall`
  - `call_in_def_rec` logs an exception and returns `None`.
  - `call_in_def_rec2` logs it and raises `RuntimeError("failed: ...")`.
  - `go` and `go_r` run a function on a new thread and return a `concurrent.futures.Future`.
  - `func_name(skip, with_file_info)` names a function further up the stack.
- `dokit.logic`
  - `logic_from`, `logic_from_wp`, `logic_from_wr`, `logic_from_wpr`, `logic_from_we`, `logic_from_wpe`, `logic_from_wre` and `logic_from_wpre` adapt functions of different shapes to `(ctx, param) -> result`.
  - `run_if` and `run_logic_if` run a logic only when a condition holds.
- `dokit.inject`
  - `Ioc(allow_private=False, verbose=False)` is a dependency-injection container.
  - `register_provider(func)` registers a function or class under its annotated return type. Its annotated parameters are resolved from other providers.
  - `inject(obj)` sets every annotated field of `obj`. Each value is built once and then shared.
- `dokit.expiring_map`
  - `ExpiringMap(watch_interval=15.0)` is a thread-safe map whose entries can carry a timeout.
  - Its methods are `insert`, `lookup` (raises `KeyError`), `get`, `items`, `remove` and `close`.
- `dokit.token`
  - `Token(secret, exp, issuer, user_type=None)` signs a user value into an HS256 token and verifies it.
  - Verification failures raise `NotValidError`, `BadIssuerError` or `ExpiredError`. All three are subclasses of `TokenError`.
  - Verifying an empty string returns `None`.
- `dokit.params`
  - `ParamParser(decoder)` offers `parse(data, target)` and `parse_and_check(ctx, data, target)`.
  - `parse_and_check` then calls `target.check(ctx)` or `target.check()`.
- `dokit.httpclient`
  - `new_http_client(timeout=None, skip_verify=False, adapter=None)` returns a `requests.Session` with a default timeout of 10 seconds.
  - `send_http_request(client, method, link, body, header, code_checker, extract_result)` sends a request and checks the status code. The default check is `code_is_200`.
  - It then turns the body into a result. The default extractor is `json_extractor`; `raw_extractor` and `xml_extractor` are also available.
  - If the result has an `extract(headers)` method, it gets the response headers. If it has a `check()` method, that is called.
  - Failures raise `HTTPRequestError`.
- `dokit.multipart`
  - `multipart_body(body, fieldname, filename, data)` writes a multipart/form-data body to a binary stream and returns its content type.
- `dokit.columns`
  - `field_names_by_column` matches columns to dataclass fields. A field matches by its `db` metadata or its lower-cased name, or by a `field_mapper` you supply.
  - `row_mapper(cls)` builds a dataclass, a scalar, or a class with `from_row` from one row.
  - `entity_with_total_mapper` reads a trailing total column into an `EntityWithTotal`.
- `dokit.db`
  - `Finder(sql, args, mapper)` and `find_func_helper(cls, query, args)` describe a query.
  - `find_list` and `find_first` run a finder.
  - `batch` hands objects to a handler in fixed-size lists.
  - `find_with_batch` runs several finders in turn.
  - `exec_with_batch` executes queries and returns `(rows affected, last id)`.
  - `handle_result(cursor)` returns `(last id, rows affected)`.
  - `wrap_tx` commits, or rolls back and re-raises. `wrap_tx_find_all` runs `find_list` inside `wrap_tx`.

## Examples

```python
from dokit.grid import square
from dokit.values import coalesce
from dokit.mapping import key_value_group_by

square(2, 7)                      # [[7, 7], [7, 7]]
coalesce(0, "", 3)                # 3
key_value_group_by([("gd", 1), ("gd", 2)], lambda t: t)   # {"gd": [1, 2]}
```

```python
from datetime import timedelta
from dokit.token import Token

secret = "secret"
token = Token(secret, timedelta(seconds=10), "issuer")
signed = token.sign(42)
assert token.verify(signed) == 42
```

```python
import sqlite3
from dataclasses import dataclass
from dokit.db import find_func_helper, find_list

@dataclass
class User:
    id: int
    name: str

conn = sqlite3.connect(":memory:")
conn.execute("create table user (id integer, name text)")
conn.execute("insert into user values (1, 'jd')")

rows = find_list(conn, find_func_helper(User, "select id, name from user"))
# [User(id=1, name='jd')]
```

## What it does not do

- There is no HTTP reverse proxy and no intercepting HTTPS proxy server. `dokit.httpclient` only sends requests.
- `dokit.db` works with any DB-API connection you open yourself. It does not open connections, and it has no connection-pool wrapper.
- `dokit.db.batch` calls its handler on the caller's thread, one list at a time. There is no concurrent variant.
- The package provides no command-line tools.