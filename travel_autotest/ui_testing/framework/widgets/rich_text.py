"""
WYSIWYG editors (RICH_TEXT capability).

TinyMCE and CKEditor (v4) are driven through their global JavaScript APIs;
Quill and generic ``contenteditable`` editors through the editable node.
When the editor has an ``iframe`` part, the node is the body of that frame.
"""

from __future__ import annotations

from enum import Enum

from ..element import Capability, Element, require
from ..session import SessionContext


class EditorType(str, Enum):
    TINYMCE = "tinymce"
    CKEDITOR = "ckeditor"
    QUILL = "quill"
    GENERIC = "generic"


class FormatType(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"


# Global-API editors: run in the page
PAGE_SCRIPTS = {
    EditorType.TINYMCE: {
        "set": "text => tinymce.activeEditor.setContent(text)",
        "insert": "text => tinymce.activeEditor.insertContent(text)",
        "get": "() => tinymce.activeEditor.getContent({format: 'text'})",
        "clear": "() => tinymce.activeEditor.setContent('')",
        "ready": "() => !!(window.tinymce && tinymce.activeEditor && tinymce.activeEditor.initialized)",
    },
    EditorType.CKEDITOR: {
        "set": "text => Object.values(CKEDITOR.instances)[0].setData(text)",
        "insert": "text => Object.values(CKEDITOR.instances)[0].insertText(text)",
        "get": "() => Object.values(CKEDITOR.instances)[0].document.getBody().getText()",
        "clear": "() => Object.values(CKEDITOR.instances)[0].setData('')",
        "ready": "() => !!(window.CKEDITOR && Object.values(CKEDITOR.instances).some(e => e.status === 'ready'))",
    },
}

# Node-level editors: run against the editable element
EDITABLE_JS = "el => el.classList.contains('ql-container') ? el.querySelector('.ql-editor') : el"

NODE_SCRIPTS = {
    "set": f"(el, text) => {{ const node = ({EDITABLE_JS})(el); node.innerHTML = text; "
           "node.dispatchEvent(new Event('input', {bubbles: true})); }",
    "insert": f"(el, text) => {{ const node = ({EDITABLE_JS})(el); node.focus(); "
              "const sel = window.getSelection(); sel.selectAllChildren(node); sel.collapseToEnd(); "
              "document.execCommand('insertText', false, text); }",
    "get": f"el => ({EDITABLE_JS})(el).innerText",
    "clear": f"el => {{ const node = ({EDITABLE_JS})(el); node.innerHTML = ''; "
             "node.dispatchEvent(new Event('input', {bubbles: true})); }",
}

APPLY_FORMAT_JS = f"""(el, command) => {{
    const node = ({EDITABLE_JS})(el);
    node.focus();
    window.getSelection().selectAllChildren(node);
    return document.execCommand(command, false, null);
}}"""


def editor_type(editor: Element) -> EditorType:
    return EditorType(editor.settings.get("editor_type", EditorType.GENERIC.value))


def _editable(editor: Element, ctx: SessionContext):
    """(element, context) pair addressing the editable node."""
    iframe = editor.parts.get("iframe")
    if iframe:
        body = Element("body", f"{editor.name} body", kind="RichTextBody")
        return body, ctx.in_frame(iframe)
    return editor, ctx


def _run(editor: Element, ctx: SessionContext, script_key: str, action: str, text=None):
    kind = editor_type(editor)
    if kind in PAGE_SCRIPTS:
        script = PAGE_SCRIPTS[kind][script_key]
        return editor.perform(
            ctx, action,
            lambda loc: ctx.page.evaluate(script, text) if text is not None else ctx.page.evaluate(script),
            "exist",
        )

    target, target_ctx = _editable(editor, ctx)
    script = NODE_SCRIPTS[script_key]
    return target.perform(
        target_ctx, action,
        lambda loc: loc.evaluate(script, text) if text is not None else loc.evaluate(script),
        "visible",
    )


def set_text(editor: Element, ctx: SessionContext, text: str) -> Element:
    require(editor, Capability.RICH_TEXT, "set_text")
    _run(editor, ctx, "set", f"Set editor content '{text[:50]}'", text)
    return editor


def insert_text(editor: Element, ctx: SessionContext, text: str) -> Element:
    require(editor, Capability.RICH_TEXT, "insert_text")
    _run(editor, ctx, "insert", f"Insert editor text '{text[:50]}'", text)
    return editor


def get_text(editor: Element, ctx: SessionContext) -> str:
    require(editor, Capability.RICH_TEXT, "get_text")
    return (_run(editor, ctx, "get", "Get editor text") or "").strip()


def clear_editor(editor: Element, ctx: SessionContext) -> Element:
    require(editor, Capability.RICH_TEXT, "clear_editor")
    _run(editor, ctx, "clear", "Clear editor")
    return editor


def apply_format(editor: Element, ctx: SessionContext, fmt: FormatType) -> Element:
    """Apply ``fmt`` to the whole content."""
    require(editor, Capability.RICH_TEXT, "apply_format")
    fmt = FormatType(fmt)
    target, target_ctx = _editable(editor, ctx)
    target.perform(
        target_ctx, f"Apply {fmt.value}",
        lambda loc: loc.evaluate(APPLY_FORMAT_JS, fmt.value),
        "visible",
    )
    return editor


def is_editor_ready(editor: Element, ctx: SessionContext) -> bool:
    """Passive query: editor API initialised, or editable node visible."""
    require(editor, Capability.RICH_TEXT, "is_editor_ready")
    kind = editor_type(editor)
    if kind in PAGE_SCRIPTS:
        script = PAGE_SCRIPTS[kind]["ready"]
        return editor.query(ctx, "editor ready", lambda loc: bool(ctx.page.evaluate(script)))
    target, target_ctx = _editable(editor, ctx)
    return target.is_visible(target_ctx)


__all__ = [
    "EditorType",
    "FormatType",
    "editor_type",
    "set_text",
    "insert_text",
    "get_text",
    "clear_editor",
    "apply_format",
    "is_editor_ready",
]
