from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pcpreset.errors import ConfigurationError

DEFAULT_STAGING_DIR = ".temp"
DEFAULT_TEMPLATE_KEY = "3"
DEFAULT_TEMPLATE_LOCATOR = "deepInsigh/pc-preset-vue#main"

# Files personalised after the template has been fetched, relative to the staging root
DEFAULT_MANIFEST_PATH = "package.json"
DEFAULT_STORE_PATH = "src/stores/modules/common.ts"
DEFAULT_HTML_PATH = "index.html"

DEFAULT_PROJECT_NAME = "my-vue-project"
DEFAULT_DESCRIPTION = "vue3项目"


class _StrictModel(BaseModel):
    """
    Pydantic parser configuration options.
    """

    model_config = ConfigDict(
        extra="forbid",
    )


class TemplateSourceType(str, Enum):
    """
    Supported kinds of template sources.
    """

    REMOTE = "remote"
    LOCAL = "local"


class TemplateConfig(_StrictModel):
    """
    A single entry of the template registry.
    """

    label: str = Field(description="Human-readable name shown in the version prompt")
    source: TemplateSourceType = Field(
        TemplateSourceType.REMOTE,
        description="Where the template tree comes from",
    )
    locator: str = Field(
        description=(
            "Template location: `[host:]owner/name[#ref]` or `direct:<url>` for remote "
            "sources, a directory path for local sources"
        ),
    )


class FileSystemConfig(_StrictModel):
    """
    Configuration for the staging directory.
    """

    staging_dir: str = Field(
        DEFAULT_STAGING_DIR,
        description="Temporary directory (relative to the working directory) the template is fetched into",
    )

    @field_validator("staging_dir")
    @classmethod
    def validate_staging_dir(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Staging directory must not be empty")
        return v


class RewriteConfig(_StrictModel):
    """
    Paths of the template files personalised for the new project.
    """

    manifest: str = Field(DEFAULT_MANIFEST_PATH, description="JSON manifest whose `name` is replaced")
    store: str = Field(DEFAULT_STORE_PATH, description="Store module whose `key: '...'` literal is replaced")
    html: str = Field(DEFAULT_HTML_PATH, description="HTML entry file whose <title> is replaced")


class FetchConfig(_StrictModel):
    """
    Configuration for downloading remote templates.
    """

    default_ref: str = Field("master", description="Branch or tag used when the locator has no `#ref`")


class EditorConfig(_StrictModel):
    """
    Configuration for opening the new project in an editor.
    """

    command: str = Field("code", description="Editor executable, called with the project path as argument")


class LogConfig(_StrictModel):
    """
    Configuration for logging.
    """

    level: str = Field(
        "WARNING",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    format: str = Field(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        description="Logging format",
    )
    output: Optional[str] = Field(
        None,
        description="Output file for logs (if not specified, logs are printed to stderr)",
    )


class Config(_StrictModel):
    """
    create-pc-preset configuration
    """

    templates: dict[str, TemplateConfig] = Field(
        default={
            DEFAULT_TEMPLATE_KEY: TemplateConfig(label="Vue 3.0", locator=DEFAULT_TEMPLATE_LOCATOR),
        },
        description="Template registry, keyed by the value chosen in the version prompt",
    )
    fs: FileSystemConfig = FileSystemConfig()
    rewrite: RewriteConfig = RewriteConfig()
    fetch: FetchConfig = FetchConfig()
    editor: EditorConfig = EditorConfig()
    log: LogConfig = LogConfig()

    @field_validator("templates")
    @classmethod
    def validate_templates(cls, v: dict[str, TemplateConfig]) -> dict[str, TemplateConfig]:
        if not v:
            raise ValueError("At least one template must be configured")
        return v

    def template(self, key: str) -> TemplateConfig:
        """
        Look up a template registry entry.

        :param key: Registry key (the chosen version).
        :return: Template configuration.
        """
        if key not in self.templates:
            raise ConfigurationError(f"Unknown template: {key}")
        return self.templates[key]


class ConfigLoader:
    """
    Configuration loader takes care of loading and parsing configuration files.

    The default loader is already initialized as `pcpreset.config.loader`. To
    load the configuration from a file, use `pcpreset.config.loader.load(path)`.

    To get the current configuration, use `pcpreset.config.get_config()`.
    """

    config: Config
    config_path: Optional[str]

    def __init__(self):
        self.config_path = None
        self.config = Config()

    @staticmethod
    def _remove_json_comments(json_str: str) -> str:
        """
        Remove comments from a JSON string.

        Removes all lines that start with "//" from the JSON string.

        :param json_str: JSON string with comments.
        :return: JSON string without comments.
        """
        return "\n".join([line for line in json_str.splitlines() if not line.strip().startswith("//")])

    @classmethod
    def from_json(cls: "ConfigLoader", config: str) -> Config:
        """
        Parse JSON Into a Config object.

        :param config: JSON string to parse.
        :return: Config object.
        """
        return Config.model_validate_json(cls._remove_json_comments(config))

    def load(self, path: str) -> Config:
        """
        Load a configuration from a file.

        :param path: Path to the configuration file.
        :return: Config object.
        """
        with open(path, "rb") as f:
            raw_config = f.read()

        if b"\x00" in raw_config:
            encoding = "utf-16"
        else:
            encoding = "utf-8"

        text_config = raw_config.decode(encoding)
        self.config = self.from_json(text_config)
        self.config_path = path
        return self.config


loader = ConfigLoader()


def get_config() -> Config:
    """
    Return current configuration.

    :return: Current configuration object.
    """
    return loader.config


__all__ = ["loader", "get_config"]
