"""
Project scaffolding templates: .gitignore, LICENSE and README files.

Templates live under a root directory as ``{Category}/{name}{ext}``, where
ext is ``.txt`` for GitIgnore and License and ``.md`` for README. Users can
customise them in ~/.buildops/templates/; anything not found there falls back
to the built-in copies shipped with the package.

Template bodies use ``{{KEY}}`` placeholders with uppercase snake case keys.
Substitution is a single pass: a substituted value is emitted as-is and never
scanned for further placeholders, and unknown keys are left in the output.
"""

import getpass
import os
import re
import shutil
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{([^{}]+)\}\}")


class TemplateCategory(str, Enum):
    GITIGNORE = "GitIgnore"
    LICENSE = "License"
    README = "README"

    @property
    def extension(self) -> str:
        return ".md" if self is TemplateCategory.README else ".txt"

    @property
    def default_filename(self) -> str:
        """The file name a rendered template is written to in a project."""
        return {
            TemplateCategory.GITIGNORE: ".gitignore",
            TemplateCategory.LICENSE: "LICENSE",
            TemplateCategory.README: "README.md",
        }[self]

    @classmethod
    def parse(cls, value) -> "TemplateCategory":
        """Accepts a category, its value in any case, or a common alias."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        aliases = {
            "gitignore": cls.GITIGNORE,
            "ignore": cls.GITIGNORE,
            "ignorefile": cls.GITIGNORE,
            "license": cls.LICENSE,
            "licence": cls.LICENSE,
            "readme": cls.README,
        }
        if key in aliases:
            return aliases[key]
        raise ValueError(f"Unknown template category: {value}")


@dataclass(frozen=True)
class TemplateDescriptor:
    category: TemplateCategory
    name: str

    def __post_init__(self):
        # names map directly onto file names under a template root
        if not self.name or self.name in (".", "..") or "/" in self.name or "\\" in self.name:
            raise ValueError(f"Invalid template name: {self.name!r}")

    @property
    def filename(self) -> str:
        return f"{self.name}{self.category.extension}"

    @property
    def relative_path(self) -> Path:
        return Path(self.category.value) / self.filename


def get_template_dir() -> Path:
    """Get the user's template directory from the configuration."""
    from .config import load_config
    directory = load_config().get("templates", {}).get("directory") or "~/.buildops/templates"
    return Path(directory).expanduser()


def get_builtin_template_dir() -> Path:
    """Get built-in template directory."""
    return Path(__file__).parent / "builtin_templates"


class TemplateStore:
    """
    Resolves templates by (category, name).

    The user root is searched before the built-in root. Nothing is cached:
    every resolve reads the file again.
    """

    def __init__(self, root=None, builtin_root=None):
        self.root = Path(root) if root is not None else get_template_dir()
        self.builtin_root = Path(builtin_root) if builtin_root is not None else get_builtin_template_dir()

    def path_for(self, category, name) -> Path:
        return self.root / TemplateDescriptor(TemplateCategory.parse(category), name).relative_path

    def find(self, category, name) -> Optional[Path]:
        """Returns the file that would be used for a template, or None."""
        category = TemplateCategory.parse(category)
        try:
            descriptor = TemplateDescriptor(category, name)
        except ValueError as e:
            logger.warning(str(e))
            return None
        for root in (self.root, self.builtin_root):
            candidate = root / descriptor.relative_path
            if candidate.is_file():
                return candidate
        return None

    def resolve(self, category, name) -> Optional[str]:
        """
        Load the raw text of a template.

        Returns:
            The template text, or None when no root has the template or
            the file cannot be read as UTF-8.
        """
        path = self.find(category, name)
        if path is None:
            logger.debug(f"Template not found: {TemplateCategory.parse(category).value}/{name}")
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read template {path}: {e}")
            return None

    def list_templates(self, category=None) -> Dict[str, List[str]]:
        """Template names per category, merged over both roots."""
        categories = [TemplateCategory.parse(category)] if category else list(TemplateCategory)
        result = {}
        for cat in categories:
            names = set()
            for root in (self.root, self.builtin_root):
                directory = root / cat.value
                if directory.is_dir():
                    names.update(f.stem for f in directory.glob(f"*{cat.extension}") if f.is_file())
            result[cat.value] = sorted(names)
        return result

    def init_user_templates(self, category=None, force=False) -> int:
        """
        Copy built-in templates into the user root.

        Returns:
            Number of templates copied.
        """
        categories = [TemplateCategory.parse(category)] if category else list(TemplateCategory)
        initialized = 0
        for cat in categories:
            builtin_dir = self.builtin_root / cat.value
            if not builtin_dir.is_dir():
                continue
            user_dir = self.root / cat.value
            user_dir.mkdir(parents=True, exist_ok=True)
            for template_file in builtin_dir.glob(f"*{cat.extension}"):
                user_file = user_dir / template_file.name
                if user_file.exists() and not force:
                    logger.debug(f"Skipping existing template: {user_file}")
                    continue
                shutil.copy2(template_file, user_file)
                logger.info(f"Initialized template: {user_file}")
                initialized += 1
        return initialized


def current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.environ.get("USER") or os.environ.get("USERNAME") or "unknown"


def default_variables() -> Dict[str, str]:
    """The variables every render starts from."""
    return {
        "YEAR": str(datetime.now().year),
        "AUTHOR": current_user(),
        "PROJECT_NAME": "MyProject",
        "PROJECT_DESCRIPTION": "",
        "LICENSE": "MIT",
        "REPO_URL": "",
    }


def _configured_variables() -> Dict[str, str]:
    from .config import load_config
    variables = load_config().get("templates", {}).get("variables") or {}
    return {str(k): str(v) for k, v in variables.items()}


def merge_variables(overrides=None, defaults=None) -> Dict[str, str]:
    """Defaults, then configured variables, then caller overrides."""
    merged = dict(defaults if defaults is not None else default_variables())
    if defaults is None:
        merged.update(_configured_variables())
    merged.update({str(k): str(v) for k, v in (overrides or {}).items()})
    return merged


def render_template(raw_text: str, overrides=None, defaults=None) -> str:
    """
    Replace ``{{KEY}}`` placeholders in raw_text.

    Args:
        raw_text: The template body.
        overrides: Caller variables; these always win over defaults.
        defaults: Replaces the built-in defaults and configured variables.

    Returns:
        The rendered text. Placeholders with no value are kept verbatim.
    """
    variables = merge_variables(overrides, defaults)

    def replace(match):
        return variables.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(replace, raw_text)


def find_placeholders(raw_text: str) -> List[str]:
    """Placeholder keys used by a template, in order of first appearance."""
    seen = []
    for key in PLACEHOLDER_RE.findall(raw_text):
        if key not in seen:
            seen.append(key)
    return seen


def describe_template(category, name, store=None) -> Dict:
    """Information about a template. A missing template is reported, not an error."""
    store = store or TemplateStore()
    category = TemplateCategory.parse(category)
    path = store.find(category, name)
    if path is None:
        return {"category": category.value, "name": name, "found": False}
    info = {"category": category.value, "name": name, "found": True, "path": str(path)}
    try:
        info["placeholders"] = find_placeholders(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read template {path}: {e}")
        info["error"] = str(e)
    return info


def create_file_from_template(category, name, destination=None, variables=None,
                              force=False, dry_run=False, store=None) -> Dict:
    """
    Render a template and write it into a project.

    Args:
        category: Template category.
        name: Template name, e.g. 'MIT' or 'Python'.
        destination: Target file or directory. A directory (or None, meaning the
            current directory) gets the category's default file name.
        variables: Placeholder overrides.
        force: Overwrite an existing file.
        dry_run: Render without writing.

    Returns:
        dict: A status dictionary.
    """
    store = store or TemplateStore()
    category = TemplateCategory.parse(category)

    raw_text = store.resolve(category, name)
    if raw_text is None:
        if store.find(category, name) is not None:
            message = f"Could not read template: {category.value}/{name}"
        else:
            message = f"Template not found: {category.value}/{name}"
        return {"status": "error", "message": message}

    target = Path(destination) if destination else Path(".")
    if target.is_dir():
        target = target / category.default_filename

    if target.exists() and not force:
        return {"status": "skipped", "reason": f"{target} already exists", "path": str(target)}

    content = render_template(raw_text, variables)

    if dry_run:
        return {"status": "success_dry_run", "path": str(target), "content": content}

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        return {"status": "error", "message": f"Failed to write {target}: {e}"}

    logger.info(f"Created {target} from {category.value}/{name}")
    return {"status": "success", "path": str(target)}
