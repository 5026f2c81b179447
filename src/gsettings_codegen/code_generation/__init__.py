"""Code generation exports."""

from .accessor_emitter import accessor_member_names, describe_default, synthesize_accessor
from .generation_models import (
    CompiledKey,
    GeneratedAccessorPair,
    GeneratedModule,
    GeneratedVariant,
)
from .module_builder import DEFAULT_CLASS_NAME, RESERVED_MEMBERS, build_settings_module
from .variant_emitter import emit_flags, emit_variant

__all__ = [
    "CompiledKey",
    "GeneratedAccessorPair",
    "GeneratedModule",
    "GeneratedVariant",
    "DEFAULT_CLASS_NAME",
    "RESERVED_MEMBERS",
    "accessor_member_names",
    "build_settings_module",
    "describe_default",
    "emit_flags",
    "emit_variant",
    "synthesize_accessor",
]
