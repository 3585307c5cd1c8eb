"""
Configuration for the schema-to-types pipeline.

The converter configuration controls how references are classified and
named; the printer configuration controls the TypeScript output.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ConverterConfig:
    """Configuration options for reference resolution and type conversion."""

    # Root segment under which named components live ("#/components/...")
    component_root: str = "components"

    # Number of segments below the root that denotes a named component
    # ("schemas/Pet" -> 2)
    component_depth: int = 2

    # Directories under "components/" whose files are named components
    component_directories: list[str] = field(default_factory=lambda: ["schemas"])

    # Maps a string/number "format" to the name of a type to reference instead
    # (e.g. {"binary": "Blob"})
    format_overrides: dict[str, str] = field(default_factory=dict)

    # Name of the key in generated index signatures
    index_signature_key: str = "key"

    # Convert component names to PascalCase before escaping
    pascal_case_names: bool = False

    @staticmethod
    def from_dict(d: dict) -> ConverterConfig:
        """Create a config from a dictionary."""
        config = ConverterConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "component_root": self.component_root,
            "component_depth": self.component_depth,
            "component_directories": list(self.component_directories),
            "format_overrides": dict(self.format_overrides),
            "index_signature_key": self.index_signature_key,
            "pascal_case_names": self.pascal_case_names,
        }


@dataclass
class PrinterConfig:
    """Configuration for the TypeScript printer."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Indentation unit for object members
    indent: str = "  "

    # Print plain object declarations as interfaces instead of type aliases
    use_interfaces: bool = True

    # Print parameter/request/response types for each operation under "paths"
    emit_operations: bool = True

    @staticmethod
    def from_dict(d: dict) -> PrinterConfig:
        """Create a config from a dictionary."""
        config = PrinterConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "indent": self.indent,
            "use_interfaces": self.use_interfaces,
            "emit_operations": self.emit_operations,
        }


@dataclass
class GeneratorConfig:
    """Top-level configuration read from the CLI config file."""

    converter: ConverterConfig = field(default_factory=ConverterConfig)
    printer: PrinterConfig = field(default_factory=PrinterConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary.

        Unknown keys are ignored. Nested "converter" and "printer"
        dictionaries are parsed into their own config objects.
        """
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "converter" and isinstance(v, dict):
                config.converter = ConverterConfig.from_dict(v)
            elif k == "printer" and isinstance(v, dict):
                config.printer = PrinterConfig.from_dict(v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "converter": self.converter.to_dict(),
            "printer": self.printer.to_dict(),
        }
