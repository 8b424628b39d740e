"""Pytest configuration and fixtures."""


import pytest

SAMPLE_CARGO_TOML = """\
[package]
name = "minver"
version = "0.1.0"
edition = "2021"

# Runtime dependencies
[dependencies]
clap = { version = "4.2.4", features = ["derive"] }
semver = "1.0.17"
thiserror = '1.0.40'  # keep literal quotes
toml_edit = "0.19.8"

[dev-dependencies]
pretty_assertions = "1.3.0"
"""

MINIMIZED_CARGO_TOML = """\
[package]
name = "minver"
version = "0.1.0"
edition = "2021"

# Runtime dependencies
[dependencies]
clap = { version = "4.0.0", features = ["derive"] }
semver = "1.0.0"
thiserror = '1.0.0'  # keep literal quotes
toml_edit = "0.19.0"

[dev-dependencies]
pretty_assertions = "1.3.0"
"""


@pytest.fixture
def sample_cargo_toml():
    """Sample Cargo.toml content with both supported entry shapes."""
    return SAMPLE_CARGO_TOML


@pytest.fixture
def minimized_cargo_toml():
    """SAMPLE_CARGO_TOML after minimizing [dependencies]."""
    return MINIMIZED_CARGO_TOML


@pytest.fixture
def crate_dir(tmp_path):
    """Create a temporary crate root containing Cargo.toml."""
    (tmp_path / "Cargo.toml").write_text(SAMPLE_CARGO_TOML)
    return tmp_path
