"""Built-in disambiguation heuristics.

Each entry pairs the candidate languages a shared extension can stand for
with an ordered ladder of content tests. Order matters: the first entry
whose candidate set contains the caller's candidates is the only one run.

Patterns are line-anchored (``re.MULTILINE``) and every one runs in time
linear in the content. Leading indentation is matched as ``[^\\S\\n]*``
rather than ``\\s*``: a ``\\s*`` that crossed a newline would rescan each
blank line from every earlier line start, and the match it could find is
already found from the last line start inside the whitespace.
"""

from __future__ import annotations

import re

from tiebreak.engine.conditions import always, any_of, contains, first_match, regex
from tiebreak.engine.registry import RuleRegistryBuilder
from tiebreak.engine.rule import Rule
from tiebreak.languages import DEFAULT_CATALOG, LanguageCatalog

OBJECTIVE_C_RE = re.compile(
    r"^[ \t]*@(interface|class|protocol|property|end|synchronised|selector|implementation)\b",
    re.MULTILINE,
)

CPP_HEADERS_RE = re.compile(
    r"^[^\S\n]*#\s*include <(cstdint|string|vector|map|list|array|bitset|queue|stack"
    r"|forward_list|unordered_map|unordered_set|(i|o|io)stream)>",
    re.MULTILINE,
)

LOOMSCRIPT_PACKAGE_RE = re.compile(r"^[^\S\n]*package", re.MULTILINE)
_PACKAGE_HEADER_RE = re.compile(r"[\w./*\s]*")

# A line holding a '/', then ': ', and ending in ' \'. Anchored on the line's
# first '/' and its first ': ' after that, atomically, so each line is
# scanned a bounded number of times.
MAKEFILE_CONTINUATION_RE = re.compile(
    r"^[^/\n]*+/(?>.*?: ).* \\$| : \\$|^ : |: \\$", re.MULTILINE
)


def loomscript_package(text: str) -> bool:
    """``package`` at a line start, then names and whitespace up to a ``{``.

    The header may span lines (``package foo\\n{``). Headers found from two
    line starts either end at the same character or do not overlap, so a
    start inside an already scanned header is skipped.
    """
    scanned_to = 0
    for found in LOOMSCRIPT_PACKAGE_RE.finditer(text):
        if found.start() < scanned_to:
            continue
        scanned_to = _PACKAGE_HEADER_RE.match(text, found.end()).end()
        if text.startswith("{", scanned_to):
            return True
    return False


# (candidate languages, heuristic), in precedence order.
BUILTIN_HEURISTICS = (
    (
        ("BitBake", "BlitzBasic"),
        first_match(
            (any_of(regex(r"^[^\S\n]*; "), contains("End Function")), "BlitzBasic"),
            (regex(r"^[^\S\n]*(# |include|require)\b"), "BitBake"),
        ),
    ),
    (
        ("C#", "Smalltalk"),
        first_match(
            (regex(r"![\w\s]+methodsFor: "), "Smalltalk"),
            (any_of(regex(r"^[^\S\n]*namespace\s*[\w.]+\s*\{"), regex(r"^[^\S\n]*//")), "C#"),
        ),
    ),
    (
        ("Objective-C", "C++", "C"),
        first_match(
            (regex(OBJECTIVE_C_RE), "Objective-C"),
            (
                any_of(
                    regex(CPP_HEADERS_RE),
                    regex(r"^[^\S\n]*template\s*<"),
                    regex(r"^[ \t]*try"),
                    regex(r"^[ \t]*catch\s*\("),
                    regex(r"^[ \t]*(class|(using[ \t]+)?namespace)\s+\w+"),
                    regex(r"^[ \t]*(private|public|protected):$"),
                    regex(r"std::\w+"),
                ),
                "C++",
            ),
        ),
    ),
    (
        ("Perl", "Perl6", "Prolog"),
        first_match(
            (contains("use v6"), "Perl6"),
            (regex(r"use strict|use\s+v?5\."), "Perl"),
            (contains(":-"), "Prolog"),
        ),
    ),
    (
        ("ECL", "Prolog"),
        first_match(
            (contains(":-"), "Prolog"),
            (contains(":="), "ECL"),
        ),
    ),
    (
        ("IDL", "Prolog"),
        first_match((contains(":-"), "Prolog"), default="IDL"),
    ),
    (
        ("GAP", "Scilab"),
        first_match((contains("gap> "), "GAP"), default="Scilab"),
    ),
    (
        ("Common Lisp", "OpenCL", "Cool"),
        first_match(
            (contains("(defun "), "Common Lisp"),
            (regex(r"^class"), "Cool"),
            (regex(r"/\* |// |^\}"), "OpenCL"),
        ),
    ),
    (
        ("Hack", "PHP"),
        first_match(
            (contains("<?hh"), "Hack"),
            (regex(r"<?[^h]"), "PHP"),
        ),
    ),
    (
        ("Scala", "SuperCollider"),
        first_match(
            (
                any_of(
                    regex(r"\^(this|super)\."),
                    regex(r"^[^\S\n]*(\+|\*)\s*\w+\s*\{"),
                    regex(r"^[^\S\n]*~\w+\s*=\."),
                ),
                "SuperCollider",
            ),
            (
                any_of(
                    regex(r"^[^\S\n]*import (scala|java)\."),
                    regex(r"^[^\S\n]*val\s+\w+\s*="),
                    regex(r"^[^\S\n]*class\b"),
                ),
                "Scala",
            ),
        ),
    ),
    (
        ("AsciiDoc", "AGS Script", "Public Key"),
        first_match(
            (regex(r"^[=-]+\s|\{\{[A-Za-z]"), "AsciiDoc"),
            (
                regex(
                    r"^(//.+|((import|export)\s+)?(function|int|float|char)\s+"
                    r"((room|repeatedly|on|game)_)?[A-Za-z][A-Za-z_0-9]+\s*[;(])"
                ),
                "AGS Script",
            ),
            (regex(r"^-----BEGIN"), "Public Key"),
        ),
    ),
    (
        ("FORTRAN", "Forth"),
        first_match(
            (regex(r"^: "), "Forth"),
            (regex(r"^([c*][^a-z]|      (subroutine|program)\s|[^\S\n]*!)", re.IGNORECASE), "FORTRAN"),
        ),
    ),
    (
        ("F#", "Forth", "GLSL"),
        first_match(
            (regex(r"^(: |new-device)"), "Forth"),
            (regex(r"^[^\S\n]*(#light|import|let|module|namespace|open|type)"), "F#"),
            (regex(r"^[^\S\n]*(#include|#pragma|precision|uniform|varying|void)"), "GLSL"),
        ),
    ),
    (
        ("M", "MUF", "Mathematica", "Matlab", "Mercury", "Objective-C"),
        first_match(
            (regex(OBJECTIVE_C_RE), "Objective-C"),
            (contains(":- module"), "Mercury"),
            (regex(r"^: "), "MUF"),
            (regex(r"^[^\S\n]*;"), "M"),
            (regex(r"^[^\S\n]*\(\*"), "Mathematica"),
            (regex(r"^[^\S\n]*%"), "Matlab"),
        ),
    ),
    (
        ("Gosu", "JavaScript"),
        first_match((regex(r"^uses java\."), "Gosu")),
    ),
    (
        ("LoomScript", "LiveScript"),
        first_match((loomscript_package, "LoomScript"), default="LiveScript"),
    ),
    (
        ("Common Lisp", "NewLisp"),
        first_match(
            (regex(r"^[^\S\n]*\((defun|in-package|defpackage) "), "Common Lisp"),
            (regex(r"^[^\S\n]*\(define "), "NewLisp"),
        ),
    ),
    (
        ("TypeScript", "XML"),
        first_match((contains("<TS "), "XML"), default="TypeScript"),
    ),
    (
        ("Frege", "Forth", "Text"),
        first_match(
            (regex(r"^(: |also |new-device|previous )"), "Forth"),
            (regex(r"^[^\S\n]*(import|module|package|data|type) "), "Frege"),
            (always, "Text"),
        ),
    ),
    (
        ("D", "DTrace", "Makefile"),
        first_match(
            (regex(r"^module "), "D"),
            (regex(r"^((dtrace:::)?BEGIN|provider |#pragma (D (option|attributes)|ident)\s)"), "DTrace"),
            (regex(MAKEFILE_CONTINUATION_RE), "Makefile"),
        ),
    ),
)


def register_builtin_rules(builder: RuleRegistryBuilder) -> None:
    """Append the built-in heuristics to *builder*, in precedence order."""
    for names, heuristic in BUILTIN_HEURISTICS:
        builder.register(names, heuristic)


def builtin_rules(catalog: LanguageCatalog = DEFAULT_CATALOG) -> tuple[Rule, ...]:
    return tuple(
        Rule(frozenset(names), heuristic, lookup=catalog.get)
        for names, heuristic in BUILTIN_HEURISTICS
    )
