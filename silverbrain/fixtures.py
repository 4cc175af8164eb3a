"""Sample entries for development and tests."""

from __future__ import annotations

from silverbrain.service import EntryCreateRequest, EntryService, RequestContext


def create_editor(service: EntryService, context: RequestContext) -> str:
    """Create a plain text entry named Editor with empty content."""
    return service.create_entry(
        context, EntryCreateRequest(name="Editor", content_type="text/plain", content="")
    )


def create_emacs(service: EntryService, context: RequestContext) -> str:
    """Create an Org entry about Emacs."""
    return service.create_entry(
        context,
        EntryCreateRequest(name="Emacs", content_type="text/org", content="Emacs editor"),
    )


def create_vim(service: EntryService, context: RequestContext) -> str:
    """Create a Markdown entry about Vim."""
    return service.create_entry(
        context,
        EntryCreateRequest(name="Vim", content_type="text/md", content="Vi IMproved"),
    )


def create_neovim(service: EntryService, context: RequestContext) -> str:
    """Create a Markdown entry about Neovim."""
    return service.create_entry(
        context,
        EntryCreateRequest(
            name="Neovim",
            content_type="text/md",
            content="hyperextensible Vim-based text editor",
        ),
    )