"""Tests for configuration management."""

import json
import tempfile
from pathlib import Path

import pytest

from genome_explorer.config import (
    Config, APIConfig, BrowseConfig, OutputConfig, get_default_config_path,
    create_example_config
)


class TestConfig:
    """Test cases for configuration management."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    def test_default_config(self):
        """Test default configuration creation."""
        config = Config.default()

        assert config.api.ucsc_base_url == "https://api.genome.ucsc.edu"
        assert config.api.gene_search_url.endswith("/api/ncbi_genes/v3/search")
        assert config.api.eutils_base_url.endswith("/entrez/eutils")
        assert config.api.ncbi_api_key is None
        assert config.api.timeout_seconds == 30.0

        assert config.browse.default_genome == "hg38"
        assert config.browse.default_organism == "Human"
        assert config.browse.max_search_results == 10
        assert config.browse.max_initial_window == 10000

        assert config.output.format == "table"
        assert config.output.fasta_line_width == 60

    def test_config_to_file(self, temp_dir):
        """Test saving configuration to file."""
        config = Config.default()
        config_file = temp_dir / "nested" / "config.json"

        config.to_file(config_file)

        with open(config_file) as f:
            data = json.load(f)

        assert data['api']['ucsc_base_url'] == "https://api.genome.ucsc.edu"
        assert data['browse']['default_genome'] == "hg38"
        assert data['output']['format'] == "table"

    def test_config_from_file(self, temp_dir):
        """Test loading configuration from file."""
        config_data = {
            'api': {'email': 'test@example.com', 'timeout_seconds': 5},
            'browse': {'default_genome': 'mm39', 'default_organism': 'Mouse'},
            'output': {'format': 'json'}
        }

        config_file = temp_dir / "config.json"
        with open(config_file, 'w') as f:
            json.dump(config_data, f)

        config = Config.from_file(config_file)

        assert config.api.email == 'test@example.com'
        assert config.api.timeout_seconds == 5
        assert config.api.ucsc_base_url == APIConfig().ucsc_base_url
        assert config.browse.default_genome == 'mm39'
        assert config.browse.max_search_results == BrowseConfig().max_search_results
        assert config.output.format == 'json'
        assert config.output.fasta_line_width == OutputConfig().fasta_line_width

    def test_config_round_trip(self, temp_dir):
        config = Config.default()
        config.browse.default_genome = 'dm6'
        config.to_file(temp_dir / "config.json")

        assert Config.from_file(temp_dir / "config.json") == config

    def test_config_from_nonexistent_file(self):
        """Test loading from nonexistent file returns defaults."""
        assert Config.from_file(Path('nonexistent.json')) == Config.default()

    def test_merge_env_vars(self, monkeypatch):
        """Test merging environment variables."""
        monkeypatch.setenv('NCBI_API_KEY', 'test_key_123')
        monkeypatch.setenv('EMAIL', 'env@example.com')
        monkeypatch.setenv('GENOME_EXPLORER_TIMEOUT', '12.5')
        monkeypatch.setenv('GENOME_EXPLORER_GENOME', 'hg19')

        config = Config.default()
        config.merge_env_vars()

        assert config.api.ncbi_api_key == 'test_key_123'
        assert config.api.email == 'env@example.com'
        assert config.api.timeout_seconds == 12.5
        assert config.browse.default_genome == 'hg19'

    def test_merge_env_vars_unset(self, monkeypatch):
        for key in ('NCBI_API_KEY', 'EMAIL', 'GENOME_EXPLORER_TIMEOUT', 'GENOME_EXPLORER_GENOME'):
            monkeypatch.delenv(key, raising=False)

        config = Config.default()
        config.merge_env_vars()

        assert config == Config.default()

    def test_merge_cli_args(self):
        """Test merging CLI arguments."""
        config = Config.default()

        config.merge_cli_args(
            api_key='cli_key',
            email='cli@example.com',
            timeout=3,
            genome='mm10',
            output_format='csv'
        )

        assert config.api.ncbi_api_key == 'cli_key'
        assert config.api.email == 'cli@example.com'
        assert config.api.timeout_seconds == 3.0
        assert config.browse.default_genome == 'mm10'
        assert config.output.format == 'csv'

    def test_merge_cli_args_ignores_none(self):
        config = Config.default()
        config.merge_cli_args(api_key=None, email=None, timeout=None, output_format=None)

        assert config == Config.default()

    def test_create_example_config(self, temp_dir):
        """Test creating example configuration."""
        config_file = temp_dir / "example.json"
        result_path = create_example_config(config_file)

        assert result_path == config_file

        with open(config_file) as f:
            data = json.load(f)

        assert data['api']['ncbi_api_key'] == "your_api_key_here"
        assert data['api']['email'] == "your_email@example.com"

    def test_get_default_config_path(self, monkeypatch):
        """Test getting default config path."""
        monkeypatch.setattr(Path, 'exists', lambda self: False)

        path = get_default_config_path()
        expected = Path.home() / '.genome_explorer' / 'config.json'

        assert path == expected
