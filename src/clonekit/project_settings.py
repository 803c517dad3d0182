"""Read and rewrite company/product names in the editor's settings file.

The settings file is line-oriented ``key: value`` text owned by the editor.
Only two keys are touched; every other line is kept byte for byte.
"""

from __future__ import annotations

import os

_COMPANY_KEY = "companyName:"
_PRODUCT_KEY = "productName:"
_INDENT = "  "


def _value_after(line: str, key: str) -> str:
    return line.split(key, 1)[1].strip()


def read_company_product(settings_file: str | os.PathLike) -> tuple[str, str]:
    """Return ``(company, product)`` from *settings_file*.

    Missing file or missing keys yield empty strings.
    """
    company = product = ""
    try:
        with open(settings_file, encoding="utf-8", errors="replace") as f:
            for line in f:
                if _COMPANY_KEY in line:
                    company = _value_after(line, _COMPANY_KEY)
                if _PRODUCT_KEY in line:
                    product = _value_after(line, _PRODUCT_KEY)
    except FileNotFoundError:
        pass
    return company, product


def set_company_product(settings_file: str | os.PathLike, company: str, product: str) -> None:
    """Rewrite the company and product lines of *settings_file* in place."""
    with open(settings_file, encoding="utf-8", newline="") as f:
        lines = f.read().splitlines(keepends=True)

    out = []
    for line in lines:
        body = line.rstrip("\r\n")
        ending = line[len(body):]
        if _COMPANY_KEY in body:
            body = f"{_INDENT}{_COMPANY_KEY} {company}"
        if _PRODUCT_KEY in body:
            body = f"{_INDENT}{_PRODUCT_KEY} {product}"
        out.append(body + ending)

    with open(settings_file, "w", encoding="utf-8", newline="") as f:
        f.write("".join(out))
