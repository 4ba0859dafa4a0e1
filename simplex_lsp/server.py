from __future__ import annotations

"""
A minimal pygls-based Language Server for Simplex.

Features:
- Text synchronization and document store
- Diagnostics: the syntax error of the buffer, if any
- Hover: builtin signatures and top-level definitions
- Completion: builtins and top-level definitions
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from simplex_lsp.indexer import build_index, BUILTIN_SIGNATURES, DocumentIndex

SOURCE = "simplex-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class SimplexLanguageServer(LanguageServer):
    CMD_NAME = "simplex-ls"
    VERSION = "0.1.0"

    def __init__(self):
        super().__init__(self.CMD_NAME, self.VERSION)
        self.documents: Dict[str, DocumentState] = {}

    def update_document(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        return state


ls = SimplexLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: SimplexLanguageServer, params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    state = ls.update_document(uri, params.text_document.text or "")
    ls.publish_diagnostics(uri, collect_diagnostics(state.index))


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: SimplexLanguageServer, params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    state = ls.update_document(uri, text)
    ls.publish_diagnostics(uri, collect_diagnostics(state.index))


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: SimplexLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    if uri in ls.documents:
        del ls.documents[uri]
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def collect_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    if idx.error is None:
        return []
    return [
        Diagnostic(
            range=_mk_range(idx.error.line, idx.error.col),
            message=idx.error.message,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
        )
    ]


# --- Hover ---
def hover_text(state: DocumentState, position: Position) -> Optional[str]:
    word, _ = extract_word_at(state.text, position)
    if not word:
        return None
    if word in state.index.symbols:
        sdef = state.index.symbols[word]
        return f"{word} - {sdef.kind} (defined at {sdef.line+1}:{sdef.col+1})"
    return BUILTIN_SIGNATURES.get(word)


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: SimplexLanguageServer, params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    contents = hover_text(state, params.position)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(state: Optional[DocumentState]) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if state is not None:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind))
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(ls: SimplexLanguageServer, params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(state))


# --- Document Symbols ---
def document_symbols(state: DocumentState) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(ls: SimplexLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state)


# --- Helpers ---
def extract_word_at(text: str, pos: Position) -> tuple[Optional[str], Position]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None, pos
    line = lines[pos.line]
    i = min(pos.character, len(line))
    # expand to identifier boundaries: whitespace and parens
    start = i
    while start > 0 and line[start - 1] not in " \t()\n\r":
        start -= 1
    end = i
    while end < len(line) and line[end] not in " \t()\n\r":
        end += 1
    word = line[start:end]
    return (word if word else None), Position(line=pos.line, character=start)


def main():
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
