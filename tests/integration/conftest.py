# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Shared fixtures for integration tests.

Provides a small but representative Next.js project: components, a custom
hook, translated and untranslated pages, and locale files in two layouts.
"""

import json
from pathlib import Path

import pytest


@pytest.fixture
def react_project(tmp_path: Path) -> Path:
    """Create a representative React/Next.js project for integration testing.

    Creates:
    - app/page.tsx: page component using a custom hook and translations
    - components/Button.tsx: component with hardcoded user-facing strings
    - hooks/useCounter.ts: custom hook built on useState
    - locales/en.json and locales/de/common.json: locale files
    - node_modules/: vendored code that must never be analysed

    Returns:
        Path to the project root directory
    """
    project_root = tmp_path / "react_project"
    files = {
        "app/page.tsx": """\
import { useTranslation } from "react-i18next";
import { Button } from "../components/Button";
import { useCounter } from "../hooks/useCounter";

export default function Home() {
  const { t } = useTranslation();
  const { count, increment } = useCounter(0);
  return (
    <main>
      <h1>{t("home.title")}</h1>
      <Button onClick={increment} label={t("home.increment")} />
      <p>{count}</p>
    </main>
  );
}
""",
        "components/Button.tsx": """\
import React from "react";

export function Button({ onClick, label }) {
  const errorMessage = "Something went wrong";
  return (
    <button onClick={onClick} title="Click to continue">
      {label}
      <span>Press here</span>
    </button>
  );
}
""",
        "hooks/useCounter.ts": """\
import { useState } from "react";

export function useCounter(initial: number) {
  const [count, setCount] = useState(initial);
  const increment = () => setCount(count + 1);
  return { count, increment };
}
""",
        "locales/en.json": json.dumps(
            {"home": {"title": "Welcome", "increment": "Add one"}}
        ),
        "locales/de/common.json": json.dumps({"home": {"title": "Willkommen"}}),
        "node_modules/lib/index.tsx": "export const Vendored = () => <div>Vendor text</div>;\n",
    }

    for relative, content in files.items():
        path = project_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    return project_root
