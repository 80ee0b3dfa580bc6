# Directory: config.py
"""
Configuration management for the application.
"""
from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class StorageConfig:
    """Configuration for the snapshot file."""

    snapshot_path: str = "data/crewdesk.json"
    indent: int = 2


@dataclass
class ExportConfig:
    """Configuration for CSV and Excel exports."""

    output_dir: str = "output"
    unassigned_label: str = "Unassigned"


@dataclass
class GeneratorConfig:
    """Configuration for demo data generation."""

    workers: int = 5
    tasks: int = 12
    hours_min: float = 0.5
    hours_max: float = 4.0
    deadline_max_days: int = 7


@dataclass
class AppConfig:
    """Main application configuration."""

    seed: int = 42
    log_level: str = "INFO"
    storage: StorageConfig = field(default_factory=StorageConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """Create a configuration from a dictionary."""
        storage_config = StorageConfig(
            snapshot_path=config_dict.get("SNAPSHOT_PATH", "data/crewdesk.json"),
            indent=config_dict.get("SNAPSHOT_INDENT", 2),
        )

        export_config = ExportConfig(
            output_dir=config_dict.get("EXPORT_OUTPUT_DIR", "output"),
            unassigned_label=config_dict.get("EXPORT_UNASSIGNED_LABEL", "Unassigned"),
        )

        # GEN_* keys map straight onto GeneratorConfig fields
        generator_config = GeneratorConfig(
            **{
                k.split("_", 1)[1].lower(): v
                for k, v in config_dict.items()
                if k.startswith("GEN_")
            }
        )

        return cls(
            seed=config_dict.get("SEED", 42),
            log_level=config_dict.get("LOG_LEVEL", "INFO"),
            storage=storage_config,
            export=export_config,
            generator=generator_config,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a flat dictionary."""
        result = {"SEED": self.seed, "LOG_LEVEL": self.log_level}

        result["SNAPSHOT_PATH"] = self.storage.snapshot_path
        result["SNAPSHOT_INDENT"] = self.storage.indent

        for key, value in vars(self.export).items():
            result[f"EXPORT_{key.upper()}"] = value

        for key, value in vars(self.generator).items():
            result[f"GEN_{key.upper()}"] = value

        return result
