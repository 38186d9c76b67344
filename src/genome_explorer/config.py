"""Configuration management for genome-explorer."""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional


@dataclass
class APIConfig:
    """Upstream service settings."""
    ucsc_base_url: str = "https://api.genome.ucsc.edu"
    gene_search_url: str = "https://clinicaltables.nlm.nih.gov/api/ncbi_genes/v3/search"
    eutils_base_url: str = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
    ncbi_api_key: Optional[str] = None
    email: Optional[str] = None
    timeout_seconds: float = 30.0


@dataclass
class BrowseConfig:
    """Defaults for browsing and searching."""
    default_genome: str = "hg38"
    default_organism: str = "Human"
    max_search_results: int = 10
    max_initial_window: int = 10000


@dataclass
class OutputConfig:
    """Output configuration settings."""
    format: str = "table"
    fasta_line_width: int = 60


@dataclass
class Config:
    """Main configuration container."""
    api: APIConfig
    browse: BrowseConfig
    output: OutputConfig

    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            api=APIConfig(),
            browse=BrowseConfig(),
            output=OutputConfig()
        )

    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from JSON file."""
        if not path.exists():
            return cls.default()

        with open(path, 'r') as f:
            data = json.load(f)

        return cls(
            api=APIConfig(**data.get('api', {})),
            browse=BrowseConfig(**data.get('browse', {})),
            output=OutputConfig(**data.get('output', {}))
        )

    def to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'api': asdict(self.api),
            'browse': asdict(self.browse),
            'output': asdict(self.output)
        }

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    def merge_env_vars(self) -> None:
        """Merge environment variables into configuration."""
        if os.getenv('NCBI_API_KEY'):
            self.api.ncbi_api_key = os.getenv('NCBI_API_KEY')
        if os.getenv('EMAIL'):
            self.api.email = os.getenv('EMAIL')
        if os.getenv('GENOME_EXPLORER_TIMEOUT'):
            self.api.timeout_seconds = float(os.getenv('GENOME_EXPLORER_TIMEOUT'))
        if os.getenv('GENOME_EXPLORER_GENOME'):
            self.browse.default_genome = os.getenv('GENOME_EXPLORER_GENOME')

    def merge_cli_args(self, **kwargs) -> None:
        """Merge CLI arguments into configuration."""
        if kwargs.get('api_key'):
            self.api.ncbi_api_key = kwargs['api_key']
        if kwargs.get('email'):
            self.api.email = kwargs['email']
        if kwargs.get('timeout'):
            self.api.timeout_seconds = float(kwargs['timeout'])
        if kwargs.get('genome'):
            self.browse.default_genome = kwargs['genome']
        if kwargs.get('output_format'):
            self.output.format = kwargs['output_format']


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    locations = [
        Path.home() / '.genome_explorer' / 'config.json',
        Path.home() / '.config' / 'genome_explorer' / 'config.json',
        Path('.genome_explorer.json'),
        Path('genome_explorer.config.json')
    ]

    for path in locations:
        if path.exists():
            return path

    return Path.home() / '.genome_explorer' / 'config.json'


def create_example_config(path: Optional[Path] = None) -> Path:
    """Create an example configuration file."""
    if path is None:
        path = Path('genome_explorer.config.example.json')

    config = Config.default()
    config.api.ncbi_api_key = "your_api_key_here"
    config.api.email = "your_email@example.com"

    config.to_file(path)
    return path
