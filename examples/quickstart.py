"""Quickstart example for intlengine.

This example demonstrates the formatting engine with a tiny hand-written
template class, and the compile pipeline with a toy compiler service.

Note: Real applications get compiled templates and the compiler service from
their message tooling. The classes below only show the expected shapes.
"""

import json
import tempfile
from pathlib import Path

from intlengine import (
    CompiledMessage,
    FormatPart,
    FormattingEngine,
    LiteralMessage,
    LocaleContext,
    ResolvableMessage,
    compile_message_files,
)


class GreetingTemplate:
    """Compiled form of: Hello, <b>{name}</b>! You have {count} new messages."""

    def format_to_parts(self, formatter, values):
        return [
            FormatPart.literal("Hello, "),
            FormatPart.rich(values["b"]([values["name"]])),
            FormatPart.literal("! You have "),
            FormatPart.literal(formatter.format_number(values["count"])),
            FormatPart.literal(" new messages."),
        ]

    def format_to_plain_string(self, formatter, values):
        return (
            f"Hello, {values['name']}! You have "
            f"{formatter.format_number(values['count'])} new messages."
        )


# Example 1: Literal messages
print("=" * 50)
print("Example 1: Literal Messages")
print("=" * 50)

context = LocaleContext("en-US")
engine = FormattingEngine(context, {"b": lambda chunks: ("<b>", *chunks, "</b>")})

print(engine.string(LiteralMessage("Hello, World!")))
# Output: Hello, World!

print(engine.format_to_parts(LiteralMessage("Hello, World!")))
# Output: ['Hello, World!']

# Example 2: Compiled messages with rich elements
print("\n" + "=" * 50)
print("Example 2: Parts, Plain Text and Markdown")
print("=" * 50)

greeting = CompiledMessage(GreetingTemplate())
values = {"name": "Anna", "count": 1234}

print(engine.format_to_parts(greeting, values))
# Output: ['Hello, ', ('<b>', 'Anna', '</b>'), '! You have 1,234 new messages.']

print(engine.format_to_plain_string(greeting, values))
# Output: Hello, Anna! You have 1,234 new messages.

print(engine.format_to_markdown_string(greeting, values))
# Output: Hello, **Anna**! You have 1,234 new messages.

# Example 3: Switching locale
print("\n" + "=" * 50)
print("Example 3: Locale Changes")
print("=" * 50)

translations = {"en-US": "Good morning", "lv": "Labrīt", "de-DE": "Guten Morgen"}
morning = ResolvableMessage(lambda locale: LiteralMessage(translations[locale]))

dispose = context.on_locale_change(lambda locale: print(f"Locale changed to {locale}"))
for locale in ("lv", "de-DE"):
    context.set_locale(locale)
    # Output: Locale changed to lv / Locale changed to de-DE
    print(engine.string(morning), "|", engine.format_to_plain_string(greeting, values))
    # Output: Labrīt | Hello, Anna! You have 1 234 new messages.
    # Output: Guten Morgen | Hello, Anna! You have 1.234 new messages.
    print(context.formatter.format_currency(1234.5, currency="EUR"))
    # Output: 1 234,50 € / 1.234,50 €
dispose()

# Example 4: Compiling definition files
print("\n" + "=" * 50)
print("Example 4: Compiling Message Definition Files")
print("=" * 50)


class ToyCompiler:
    """Stores definition sources and writes them back as JSON."""

    def __init__(self):
        self.sources = {}

    def is_definitions_file(self, path):
        return path.endswith(".messages.js")

    def process_definitions_file(self, path):
        self.sources[path] = Path(path).read_text(encoding="utf-8")

    def precompile(self, path, locale, output_path, output_format):
        payload = {"locale": locale, "format": str(output_format), "source": self.sources[path]}
        Path(output_path).write_text(json.dumps(payload), encoding="utf-8")


with tempfile.TemporaryDirectory() as tmpdir:
    root = Path(tmpdir)
    (root / "home.messages.js").write_text("export default { title: 'Home' };\n", encoding="utf-8")
    (root / "node_modules").mkdir()
    (root / "node_modules" / "lib.messages.js").write_text("{}", encoding="utf-8")

    session = compile_message_files([root], ToyCompiler(), watch=False)
    summary = session.initial_summary
    print(f"Compiled {summary.successful} of {summary.total} files")
    # Output: Compiled 1 of 1 files
    print(sorted(path.name for path in root.glob("*.compiled.messages.jsona")))
    # Output: ['home.compiled.messages.jsona']

print("\n" + "=" * 50)
print("All examples completed successfully!")
print("=" * 50)
