# silverbrain

Silver Brain is your external brain: a small personal knowledge store.
Entries are notes with a name, a content type and content. They live in named
stores. Each store is a directory under a data directory and holds its own
SQLite database. A small HTTP server makes the stores available to clients.

## Installation

```
pip install .
```

To run the test suite with `pytest`, install the `test` extra with `pip install .[test]`.

## Starting the server

```
silver-brain server start --port 5000
```

The standalone server command also turns on debug logging:

```
silver-brain-server start --data-path ~/.silver-brain --port 5000
```

Both commands take the same two options:

- `-d`/`--data-path` sets the data directory. It defaults to `~/.silver-brain`, and a leading `~` is expanded.
- `-p`/`--port` sets the port. It defaults to `5000`.

The server listens on `127.0.0.1`. If the data directory does not exist, the
server creates it.

## HTTP API

Requests that work on a store name the store in the `X-SB-StoreName` header.

| Method | Path                   | Purpose                                              |
|--------|------------------------|------------------------------------------------------|
| GET    | `/`                    | Returns `Silver Brain v2`                            |
| POST   | `/api/v2/stores`       | Creates the store named in the header (201)          |
| GET    | `/api/v2/stores`       | Lists store names, sorted, as a JSON array           |
| DELETE | `/api/v2/stores`       | Deletes the store named in the header (204)          |
| POST   | `/api/v2/entries`      | Creates an entry; the response body is its ID (201)  |
| GET    | `/api/v2/entries/<id>` | Returns an entry as JSON                             |

The create body is a JSON object. `name` is required. `content_type` and
`content` are optional and default to empty strings:

```json
{"name": "Neovim", "content_type": "text/md", "content": "hyperextensible Vim-based text editor"}
```

Entry IDs are KSUIDs, so they sort by creation time.

An entry is always returned with `id` and `name`. The `load` query parameter
adds optional parts. It takes a comma-separated list of these values:

- `contents` adds `content_type` and `content`.
- `attachments` adds an `attachments` list.
- `times` adds `create_time` and `update_time` in RFC 3339 format.

For example:

```
GET /api/v2/entries/<id>?load=contents,attachments,times
```

Errors map to status codes:

- A missing entry returns 404.
- A bad request returns 400. A missing store header, a body that is not JSON, and a missing or non-string `name` all count as bad requests.
- Any other failure returns 500. This includes listing stores before any store has been created.

## Using it as a library

```python
from silverbrain.store import SqliteStore
from silverbrain.entry_service import SqlEntryService
from silverbrain.service import RequestContext, EntryCreateRequest, EntryLoadOptions

store = SqliteStore("/tmp/brain")
store.create_store("default")
service = SqlEntryService(store)
context = RequestContext()  # the store name defaults to "default"

entry_id = service.create_entry(
    context, EntryCreateRequest(name="Vim", content_type="text/md", content="Vi IMproved")
)
entry = service.get_entry(context, entry_id, EntryLoadOptions(load_content=True))
print(entry.to_dict())
```

`SqlEntryService` provides the following methods:

- `count_entries`
- `create_entry`
- `get_entry`
- `get_entries`
- `update_entry`, which takes an `EntryUpdateRequest`
- `delete_entry`
- `create_attachment`, which takes an `AttachmentCreateRequest`
- `update_attachment`, which takes an `AttachmentUpdateRequest`
- `delete_attachment`

When a lookup fails, these methods raise `NotFoundError`. All of their errors
derive from `silverbrain.service.ServiceError`.

`create_attachment` needs a path to an existing file. If the path is not an
existing file, it raises `InvalidAttachmentFilePathError`. The method records
the path and a size of 0; it does not copy the file.

## Search expressions

`silverbrain.search.parse` turns a search string into a query tree. The tree
is built from the classes in `silverbrain.query`: `Keyword`, `Filter`,
`Property`, `And`, `Or` and `Not`.

```python
from silverbrain.search import parse

parse('editor && "text editor" || status:done !archived')
# Or((And((Keyword('editor'), Keyword('text editor'))),
#     And((Filter('status', CompareOperator.EQUAL, 'done'), Not(Keyword('archived'))))))
```

A search string can contain these parts:

- **Keywords** are bare words or double-quoted strings.
- **Filters** take the form `key:value`.
- **Properties** take the form `key=value`, `key!=value`, `key<value` or `key>value`.
- **Operators** are `!` or `not`, `&&` or `and`, and `||` or `or`. Words next to each other are joined with "and". "Or" binds loosest.
- **Parentheses** group parts of the expression.

`parse` raises `InvalidSearchError` when it cannot read the whole string. This
also happens when a word operator such as `not` ends the string.

## What it does not do

- There is no link storage. `Link` exists as a domain class, but no service stores links.
- The HTTP routes for links and attachments do nothing and answer with an empty 200. These are `/api/v2/links`, `/api/v2/links/<id>`, `/api/v2/attachments` and `/api/v2/attachments/<id>`.
- The routes that would update and delete entries also do nothing and answer with an empty 200. These are PATCH and DELETE on `/api/v2/entries/<id>`. Entries can be updated and deleted only through the library.
- Search expressions are parsed into query trees only. Nothing runs them against a store.