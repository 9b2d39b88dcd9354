import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent


def write(p: Path, text: str) -> Path:
    """Write text to a file, creating parent directories as needed."""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
    return p


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH", "")]))
    return subprocess.run(
        [sys.executable, "-m", "tkx.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Small UI project: a plain template, a component with an inline template and a service."""
    root = tmp_path
    write(root / "src" / "app" / "home.component.html", """
        <div class="home">
          <translate key="dfa.home.title"></translate>
          <public-translate [key]="isNew ? 'dfa.home.new' : 'dfa.home.old'"></public-translate>
          <translate>  Welcome back  </translate>
        </div>
    """)
    write(root / "src" / "app" / "card.component.ts", """
        import { Component } from '@angular/core';

        @Component({
          selector: 'app-card',
          template: `<translate key="dfa.card.title"></translate>`,
        })
        export class CardComponent {
          label = 'dfa.card.label|Card';
        }
    """)
    write(root / "src" / "app" / "links.service.ts", """
        export const LINKS = {
          help: "dfa.links.help|Help",
          docs: 'dfa.links.docs|https://example.com',
          missing: 'dfa.links.missing|not-set',
        };
    """)
    return root


@pytest.fixture
def cli():
    """Run ``tkx`` in a subprocess: ``cli(cwd, *args)``."""
    return run_cli
