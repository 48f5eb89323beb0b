"""
Generation Service.

Orchestrates the app lifecycle: naming, code generation, sanitization,
validation and catalog bookkeeping for create, edit and delete, plus the
prompt-improvement and provider-probe helpers.
"""

from __future__ import annotations

from ...core.exceptions import (
    BadRequestError,
    FileSystemError,
    NotFoundError,
    ProviderCallError,
    ValidationError,
)
from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...generation import derive_component_name, resolve_naming, sanitize
from ...models.catalog import CatalogEntry, CreatedApp, EditedApp
from ...models.generation import GenerationContext, GenerationMode, ValidationResult
from ...prompts import PromptBuilder
from ...providers.base import TextProvider
from ...providers.registry import ProviderResolver
from ...storage import CatalogStore, FileStore
from ...validation import ValidationGate
from ..base import run_operation

logger = get_logger(__name__)

DEFAULT_PROBE_PROMPT = "Say hello and tell me what you can do in one sentence"
CREATE_VALIDATION_MESSAGE = "Generated code has syntax errors. Please try again."
EDIT_VALIDATION_MESSAGE = "Generated code has syntax errors. Please try editing again."


def _require_text(value: str | None, field_name: str) -> str:
    if value is None or not value.strip():
        raise BadRequestError(message=f"{field_name} is required", field_name=field_name)
    return value.strip()


class GenerationService:
    """Service for creating, editing and removing generated apps.

    Each create is: name -> generate -> sanitize -> write -> validate ->
    register. A create that fails validation leaves no file and no catalog
    entry behind. Edits never touch the catalog.
    """

    def __init__(
        self,
        resolver: ProviderResolver,
        prompts: PromptBuilder,
        artifacts: FileStore,
        catalog: CatalogStore,
        gate: ValidationGate,
        artifact_extension: str = ".tsx",
        rollback_failed_edits: bool = False,
    ) -> None:
        """Initialize the generation service.

        Args:
            resolver: Provider resolver for the current deployment
            prompts: Prompt builder
            artifacts: Store for generated component files
            catalog: App catalog
            gate: Validation gate run after every write
            artifact_extension: Extension of generated component files
            rollback_failed_edits: Validate edits in a staging file and keep
                the previous source when they fail
        """
        self.resolver = resolver
        self.prompts = prompts
        self.artifacts = artifacts
        self.catalog = catalog
        self.gate = gate
        self.artifact_extension = artifact_extension
        self.rollback_failed_edits = rollback_failed_edits

    async def _call(self, provider: TextProvider, prompt: str, purpose: str) -> str:
        """Invoke a provider, prefixing failures with what was being attempted."""
        try:
            return await provider.generate_text(prompt)
        except ProviderCallError as e:
            raise type(e)(
                message=f"Failed to {purpose} with {provider.get_name()}: {e.message}",
                context=e.context,
                cause=e,
                provider_name=e.provider_name,
                exit_code=e.exit_code,
            ) from e

    async def _write_and_validate(self, key: str, source: str) -> ValidationResult:
        await self.artifacts.store_text(key, source)
        return await self.gate.validate(self.artifacts.path_for(key))

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_app(self, description: str, provider_name: str | None = None) -> ServiceResult[CreatedApp]:
        """Create a new app from a free-text description.

        Args:
            description: What the app should do
            provider_name: Requested provider; the configured default when None

        Returns:
            ServiceResult containing the created app on success.
        """
        return await run_operation(
            "create_app",
            lambda: self._create(description, provider_name),
            provider=provider_name,
        )

    async def _create(self, description: str, provider_name: str | None) -> ServiceResult[CreatedApp]:
        description = _require_text(description, "description")
        provider = self.resolver.resolve(provider_name)
        name = provider.get_name()

        logger.info("Generating app name", provider=name)
        raw_naming = await self._call(provider, self.prompts.naming_prompt(description), "generate app name")
        naming, fell_back = resolve_naming(raw_naming, description)

        context = GenerationContext(
            mode=GenerationMode.CREATE,
            provider_name=name,
            request_text=description,
            component_name=derive_component_name(naming.name),
        )
        file_name = f"{context.component_name}{self.artifact_extension}"

        logger.info("Generating component", provider=name, component=context.component_name)
        prompt = self.prompts.enhance(
            self.prompts.generation_prompt(context.request_text, context.component_name),
            name,
        )
        source = sanitize(await self._call(provider, prompt, "generate component"))

        validation = await self._write_and_validate(file_name, source)
        if not validation.passed:
            await self.artifacts.delete(file_name)
            logger.info("Removed invalid artifact", file=file_name)
            raise ValidationError(
                message=CREATE_VALIDATION_MESSAGE,
                diagnostics=validation.diagnostics,
                file_name=file_name,
            )

        entry = CatalogEntry(
            name=naming.name,
            component_name=context.component_name,
            file_name=file_name,
            description=naming.short_description,
            ai_provider=name,
        )
        try:
            await self.catalog.append(entry)
        except FileSystemError:
            await self.artifacts.delete(file_name)
            raise

        logger.info("App created", app_id=entry.id, file=file_name, naming_fallback=fell_back)
        created = CreatedApp.from_entry(entry)
        if validation.warning:
            return ServiceResult.with_warnings(created, [validation.warning], provider=name)
        return ServiceResult.ok(created, provider=name)

    # ------------------------------------------------------------------
    # Edit
    # ------------------------------------------------------------------

    async def edit_app(
        self, app_id: str, instructions: str, provider_name: str | None = None
    ) -> ServiceResult[EditedApp]:
        """Rewrite an existing app according to natural-language instructions.

        Args:
            app_id: Catalog id of the app
            instructions: Requested change
            provider_name: Requested provider; the configured default when None

        Returns:
            ServiceResult containing the edit outcome. On validation failure
            ``data.rolled_back`` tells whether the previous source was kept.
        """
        return await run_operation(
            "edit_app",
            lambda: self._edit(app_id, instructions, provider_name),
            app_id=app_id,
            provider=provider_name,
        )

    async def _edit(self, app_id: str, instructions: str, provider_name: str | None) -> ServiceResult[EditedApp]:
        instructions = _require_text(instructions, "instructions")
        entry = await self.catalog.find_by_id(app_id)
        if entry is None:
            raise NotFoundError(message="App not found", resource="app", key=app_id)

        try:
            current_source = await self.artifacts.load_text(entry.file_name)
        except NotFoundError as e:
            raise NotFoundError(
                message="App file not found", resource="artifact", key=entry.file_name, cause=e
            ) from e

        provider = self.resolver.resolve(provider_name)
        name = provider.get_name()
        context = GenerationContext(
            mode=GenerationMode.EDIT,
            provider_name=name,
            request_text=instructions,
            component_name=entry.component_name,
            current_source=current_source,
        )

        logger.info("Editing component", provider=name, file=entry.file_name)
        prompt = self.prompts.enhance(
            self.prompts.edit_prompt(context.current_source or "", context.request_text, context.component_name),
            name,
        )
        source = sanitize(await self._call(provider, prompt, "edit component"))

        if self.rollback_failed_edits:
            validation = await self._validate_staged(entry.file_name, source)
        else:
            validation = await self._write_and_validate(entry.file_name, source)

        result = EditedApp(
            id=entry.id,
            file_name=entry.file_name,
            ai_provider=name,
            rolled_back=self.rollback_failed_edits and not validation.passed,
        )
        if not validation.passed:
            error = ValidationError(
                message=EDIT_VALIDATION_MESSAGE,
                diagnostics=validation.diagnostics,
                file_name=entry.file_name,
            )
            logger.error(
                "Edit failed validation",
                file=entry.file_name,
                rolled_back=result.rolled_back,
            )
            return ServiceResult.from_error(error, data=result, provider=name)

        logger.info("App edited", app_id=entry.id, file=entry.file_name)
        if validation.warning:
            return ServiceResult.with_warnings(result, [validation.warning], provider=name)
        return ServiceResult.ok(result, provider=name)

    async def _validate_staged(self, file_name: str, source: str) -> ValidationResult:
        """Validate an edit next to the live file and swap it in only if it passes."""
        stem = file_name.removesuffix(self.artifact_extension)
        staging_key = f"{stem}.staging{self.artifact_extension}"
        try:
            validation = await self._write_and_validate(staging_key, source)
            if validation.passed:
                await self.artifacts.replace(staging_key, file_name)
            return validation
        finally:
            # No-op after a successful replace.
            await self.artifacts.delete(staging_key)

    # ------------------------------------------------------------------
    # Catalog operations
    # ------------------------------------------------------------------

    async def list_apps(self) -> ServiceResult[list[CatalogEntry]]:
        """List every catalog entry in insertion order."""

        async def handler() -> ServiceResult[list[CatalogEntry]]:
            return ServiceResult.ok(await self.catalog.list())

        return await run_operation("list_apps", handler)

    async def delete_app(self, app_id: str) -> ServiceResult[CatalogEntry]:
        """Delete an app's artifact file and its catalog entry."""
        return await run_operation("delete_app", lambda: self._delete(app_id), app_id=app_id)

    async def _delete(self, app_id: str) -> ServiceResult[CatalogEntry]:
        entry = await self.catalog.find_by_id(app_id)
        if entry is None:
            raise NotFoundError(message="App not found", resource="app", key=app_id)

        if not await self.artifacts.delete(entry.file_name):
            logger.warning("Artifact already missing", file=entry.file_name)
        removed = await self.catalog.remove(app_id)
        logger.info("App deleted", app_id=app_id, file=entry.file_name)
        return ServiceResult.ok(removed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def improve_prompt(self, raw_description: str, provider_name: str | None = None) -> ServiceResult[str]:
        """Rewrite a rough idea into a detailed app description."""

        async def handler() -> ServiceResult[str]:
            text = _require_text(raw_description, "prompt")
            provider = self.resolver.resolve(provider_name)
            improved = await self._call(provider, self.prompts.improve_prompt(text), "improve prompt")
            return ServiceResult.ok(improved.strip(), provider=provider.get_name())

        return await run_operation("improve_prompt", handler, provider=provider_name)

    async def probe_provider(
        self, provider_name: str | None = None, prompt: str = DEFAULT_PROBE_PROMPT
    ) -> ServiceResult[str]:
        """Send a trivial prompt to check that a provider answers."""

        async def handler() -> ServiceResult[str]:
            provider = self.resolver.resolve(provider_name)
            reply = await self._call(provider, prompt, "reach provider")
            return ServiceResult.ok(reply.strip(), provider=provider.get_name())

        return await run_operation("probe_provider", handler, provider=provider_name)
