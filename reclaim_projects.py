#!/usr/bin/env python3
"""
Find stale software projects and reclaim the disk space their build output uses.

Projects are recognized by their build-tool manifests (Cargo.toml, package.json,
mix.exs, pom.xml, ...). Cleaning removes build output and dependency caches;
`--archive` additionally packs each project into a single .tar.xz file.

This is a thin wrapper around the project_reclaim package.
"""
from __future__ import annotations

from project_reclaim.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
