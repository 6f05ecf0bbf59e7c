"""Classification (content type) registry.

Content types are data, not code: each one is a sub-directory of the
content type template root holding ``metadata.md``, ``body.md`` and
``footer.md``. The type's symbol is read back from the first
non-structural tag in its metadata fragment, so the registry is a pure
scan of the store. Creating a type clones the "Basic" type and rewrites
its ``content_type`` field and tag.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from vaultnote.domain.content import parse_frontmatter, primary_tag, update_frontmatter
from vaultnote.domain.errors import (
    ConfigurationError,
    StoreOperationError,
    TemplateError,
)
from vaultnote.domain.models import ClassificationDescriptor
from vaultnote.domain.validation import (
    ValidationVerdict,
    grapheme_clusters,
    validate_symbol,
    validate_title,
)
from vaultnote.infrastructure.prompts import Prompter
from vaultnote.infrastructure.store import StoreEntry, join_path
from vaultnote.services.base import BaseService
from vaultnote.services.result import ServiceResult
from vaultnote.services.retry import retry_with_validation
from vaultnote.services.symbols import choose_symbol

METADATA_FRAGMENT = "metadata.md"
BODY_FRAGMENT = "body.md"
FOOTER_FRAGMENT = "footer.md"
FRAGMENTS = (METADATA_FRAGMENT, BODY_FRAGMENT, FOOTER_FRAGMENT)

CREATE_NEW = "__create__"
_MAX_SCAN_WORKERS = 8


class ClassificationRegistry(BaseService):
    """Discovers, creates, and interactively selects content types."""

    @property
    def root(self) -> str:
        return self.layout.classification_root

    def template_dir(self, name: str) -> str:
        return join_path(self.root, name)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def list_classifications(self) -> list[ClassificationDescriptor]:
        """Scan the template root for content types, sorted by name.

        Metadata fragments are read concurrently; an unreadable or
        tagless fragment only degrades its own entry to the placeholder
        symbol.
        """
        try:
            children = self._store.list_children(self.root)
        except StoreOperationError as exc:
            self._reporter.debug("content type root unavailable", path=self.root, error=str(exc))
            return []

        directories = [child for child in children if child.is_dir]
        if not directories:
            return []

        workers = min(_MAX_SCAN_WORKERS, len(directories))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            descriptors = list(pool.map(self._describe, directories))
        return sorted(descriptors, key=lambda d: d.name)

    def _describe(self, entry: StoreEntry) -> ClassificationDescriptor:
        placeholder = self._config.symbols.placeholder
        metadata_path = join_path(entry.path, METADATA_FRAGMENT)
        try:
            tag = primary_tag(self._store.frontmatter(metadata_path))
            if tag is None:
                msg = "no content type tag in metadata"
                raise ValueError(msg)
            symbol = grapheme_clusters(tag)[0]
        except Exception as exc:
            self._reporter.debug(
                "content type symbol unavailable",
                name=entry.name,
                error=str(exc),
            )
            symbol = placeholder
        return ClassificationDescriptor(name=entry.name, symbol=symbol)

    def get(self, name: str) -> ClassificationDescriptor | None:
        for descriptor in self.list_classifications():
            if descriptor.name == name:
                return descriptor
        return None

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_classification(self, name: str, symbol: str) -> ClassificationDescriptor:
        """Scaffold a new content type from the basic one.

        Raises:
            TemplateError: The basic content type's metadata is missing
                or cannot be rewritten.
            StoreOperationError: The new directory or a fragment could not
                be created (including when the type already exists).
        """
        base_dir = self.template_dir(self.layout.basic_classification)
        base_metadata = join_path(base_dir, METADATA_FRAGMENT)
        if not self._store.exists(base_metadata):
            raise TemplateError("clone", base_metadata, "basic content type template is missing")

        descriptor = ClassificationDescriptor(name=name, symbol=symbol)

        # Everything is read and rewritten before the directory exists, so a
        # bad basic template never leaves a half-made type behind.
        contents: dict[str, str] = {}
        for fragment in FRAGMENTS:
            source = join_path(base_dir, fragment)
            if not self._store.exists(source):
                self._reporter.warn(f"Basic template has no {fragment}; skipped for {name}")
                continue
            content = self._store.read(source)
            if fragment == METADATA_FRAGMENT:
                content = self._rewrite_metadata(content, descriptor, source)
            contents[fragment] = content

        target_dir = self.template_dir(name)
        self._store.create_directory(target_dir)
        for fragment, content in contents.items():
            self._store.create(join_path(target_dir, fragment), content)

        self._reporter.info("content type created", name=name, tag=descriptor.search_tag)
        self._reporter.notice(f"Created content type {descriptor.display_label}")
        return descriptor

    @staticmethod
    def _rewrite_metadata(content: str, descriptor: ClassificationDescriptor, source: str) -> str:
        try:
            fm, _body = parse_frontmatter(content)
            old_tag = primary_tag(fm)
            tags = [str(tag) for tag in fm.get("tags") or []]
            if old_tag is None:
                tags.append(descriptor.search_tag)
            else:
                tags = [descriptor.search_tag if tag == old_tag else tag for tag in tags]
            return update_frontmatter(
                content,
                {"content_type": descriptor.name, "tags": tags},
            )
        except Exception as exc:
            raise TemplateError("rewrite", source, str(exc)) from exc

    def validate_name(self, candidate: str) -> ValidationVerdict:
        """Title rules plus a check that no content type has this name."""
        verdict = validate_title(candidate)
        if not verdict.valid:
            return verdict
        if self._store.exists(self.template_dir(candidate)):
            return ValidationVerdict.fail(
                f"Content type '{candidate}' already exists",
                f"Pick it from the list instead, or use '{candidate} 2'",
            )
        return verdict

    def add_type(self, name: str, symbol: str) -> ServiceResult:
        """Non-interactive creation for the ``types create`` command."""
        op = "create_type"
        verdict = self.validate_name(name)
        if not verdict.valid:
            code = "TYPE_EXISTS" if "already exists" in (verdict.error or "") else "INVALID_NAME"
            return ServiceResult.failure(op, code, verdict.error or "Invalid name", name=name)
        verdict = validate_symbol(symbol)
        if not verdict.valid:
            return ServiceResult.failure(
                op, "INVALID_SYMBOL", verdict.error or "Invalid symbol", symbol=symbol
            )
        try:
            descriptor = self.create_classification(name, symbol)
        except StoreOperationError as exc:
            return ServiceResult.failure(op, "STORE_ERROR", str(exc), path=exc.path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": descriptor.name,
                "symbol": descriptor.symbol,
                "search_tag": descriptor.search_tag,
                "path": self.template_dir(descriptor.name),
            },
        )

    # ------------------------------------------------------------------
    # Interactive selection
    # ------------------------------------------------------------------

    def select_or_create(self, prompter: Prompter) -> ClassificationDescriptor:
        """Pick an existing content type or create a new one.

        Raises:
            ConfigurationError: Nothing was picked and no basic type exists.
            OperationCancelled: The user aborted while naming a new type.
        """
        existing = self.list_classifications()
        labels = [d.display_label for d in existing] + ["➕ Create a new content type"]
        values = [d.name for d in existing] + [CREATE_NEW]

        picked = prompter.choice(labels, values, "Content type:")
        if picked == CREATE_NEW:
            return self._create_interactively(prompter)
        if picked is not None:
            return next(d for d in existing if d.name == picked)

        basic_name = self.layout.basic_classification
        basic = next((d for d in existing if d.name == basic_name), None)
        if basic is None:
            msg = (
                f"No content type chosen and no '{basic_name}' content type "
                f"exists under {self.root}"
            )
            raise ConfigurationError(msg)
        self._reporter.warn(f"No content type chosen; using {basic.display_label}")
        return basic

    def _create_interactively(self, prompter: Prompter) -> ClassificationDescriptor:
        name = retry_with_validation(
            prompter,
            self._reporter,
            "Name of the new content type",
            self.validate_name,
            max_attempts=self._config.prompts.max_attempts,
        )
        symbol = choose_symbol(
            prompter,
            self._reporter,
            f"the '{name}' content type",
            default=self._config.symbols.default,
            max_attempts=self._config.prompts.max_attempts,
        )
        return self.create_classification(name, symbol)
