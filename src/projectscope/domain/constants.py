from __future__ import annotations

"""
Domain Constants and Static Lookup Tables.

Centralizes the fixed vocabularies used by the scanner: the built-in ignore
set, extension-to-language mapping, well-known package labels, notable
root files, lock-file priority and directory classification keywords.
"""

from typing import Dict, FrozenSet, List, Tuple

# -----------------------------------------------------------------------------
# ARTIFACT DEFAULTS
# -----------------------------------------------------------------------------

STATE_DIR_NAME = ".projectscope"
DEFAULT_STRUCTURE_FILE_NAME = "project-structure.json"
MANIFEST_FILE_NAME = "package.json"

DEFAULT_MAX_DEPTH = 3
MIN_MAX_DEPTH = 1
MAX_MAX_DEPTH = 10

DEFAULT_MAX_ENTRIES = 60
MIN_MAX_ENTRIES = 1
MAX_MAX_ENTRIES = 500

# Summary caps applied to the overview payload
MAX_SCRIPTS = 12
MAX_DEPENDENCIES = 16
MAX_CLASSIFIED_DIRECTORIES = 20

NO_EXTENSION_KEY = "<none>"
HIDDEN_PREFIX = "."
ENV_FILE_PREFIX = ".env"

# -----------------------------------------------------------------------------
# CLASSIFICATION TABLES
# -----------------------------------------------------------------------------

DEFAULT_IGNORE: FrozenSet[str] = frozenset({
    # Version control
    ".git", ".hg", ".svn",
    # Dependency and package caches
    "node_modules", ".yarn", ".pnpm-store", ".venv", "__pycache__",
    ".mypy_cache", ".pytest_cache",
    # Build and output
    ".turbo", ".next", ".nuxt", "dist", "build", "out", "coverage",
    "tmp", "temp",
    # Editor metadata
    ".idea", ".vscode", ".DS_Store",
    # Own state
    STATE_DIR_NAME,
})

EXTENSION_LANGUAGE_MAP: Dict[str, str] = {
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".json": "JSON",
    ".md": "Markdown",
    ".yml": "YAML",
    ".yaml": "YAML",
    ".env": "Configuration",
    ".toml": "TOML",
    ".cfg": "Configuration",
    ".ini": "Configuration",
    ".html": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".sass": "SCSS",
    ".less": "LESS",
    ".py": "Python",
    ".rs": "Rust",
    ".go": "Go",
    ".rb": "Ruby",
}

KNOWN_TECH_LABELS: Dict[str, str] = {
    "react": "React",
    "react-dom": "React DOM",
    "next": "Next.js",
    "vue": "Vue",
    "svelte": "Svelte",
    "angular": "Angular",
    "express": "Express",
    "koa": "Koa",
    "fastify": "Fastify",
    "nestjs": "NestJS",
    "hapi": "hapi",
    "vite": "Vite",
    "webpack": "Webpack",
    "jest": "Jest",
    "vitest": "Vitest",
    "playwright": "Playwright",
    "cypress": "Cypress",
    "typescript": "TypeScript",
    "@modelcontextprotocol/sdk": "Model Context Protocol SDK",
    "fastmcp": "FastMCP",
    "openai": "OpenAI SDK",
    "commander": "Commander.js",
    "pino": "Pino",
    "zod": "Zod",
    "dotenv": "dotenv",
}

# Label added whenever the manifest declares any dependency at all
MANIFEST_ECOSYSTEM_LABEL = "Node.js"

NOTABLE_FILES: List[str] = [
    "README.md",
    "CONTRIBUTING.md",
    "LICENSE",
    "tsconfig.json",
    "package.json",
    "pnpm-lock.yaml",
    "yarn.lock",
    "package-lock.json",
    "bun.lockb",
]

# Checked in order; first hit wins
LOCK_FILE_MANAGERS: List[Tuple[str, str]] = [
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
    ("bun.lockb", "bun"),
]

COMPONENT_KEYWORDS: Tuple[str, ...] = ("component", "components")
ENTITY_KEYWORDS: Tuple[str, ...] = ("entity", "entities")
