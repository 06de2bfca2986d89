from pathlib import Path
from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Generation settings pulled from RELIEF_* environment variables."""

    # Heightmap Configuration
    width: int = Field(default=1024, ge=1, description="Heightmap width in cells")
    height: int = Field(default=1024, ge=1, description="Heightmap height in cells")
    tiling: float = Field(default=8.0, gt=0, description="Base spatial period of the noise")
    seed: int = Field(default=0, description="Seed for noise and crater draws")

    # Crater Configuration
    crater_count: int = Field(default=5, ge=0, description="Number of craters stamped")
    crater_template_path: Path = Field(
        default=Path(__file__).resolve().parent.parent / "resources" / "crater.pgm",
        description="Grayscale crater profile image",
    )
    crater_rotation: float = Field(default=1.8, description="Crater rotation in radians")

    # Performance Configuration
    workers: int = Field(default=1, ge=1, description="Threads per noise field")

    # Output Configuration
    output_dir: Path = Field(default=Path("./output"), description="Directory for exported heightmaps")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    model_config = SettingsConfigDict(
        env_prefix="RELIEF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def generation_config(self):
        """Build the call-time GenerationConfig from these settings."""
        from ..core.terrain_generator import GenerationConfig

        return GenerationConfig(
            width=self.width,
            height=self.height,
            tiling=self.tiling,
            crater_count=self.crater_count,
            seed=self.seed,
            crater_template_path=self.crater_template_path,
            workers=self.workers,
            crater_rotation=self.crater_rotation,
        )


# Instantiate singleton settings object
settings = Settings()
