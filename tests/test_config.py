import os
from pathlib import Path
from unittest.mock import patch

from municipality_crawler.config import Config, get_config, reload_config


def test_defaults():
    with patch.dict(os.environ, {}, clear=True):
        config = Config(_env_file=None)

    assert config.google_cloud_project == "pan-lab-x"
    assert config.google_cloud_location == "global"
    assert config.batch_size == 5
    assert config.batch_delay_seconds == 1.0
    assert config.max_image_attempts == 3
    assert config.results_path == Path("output") / "municipalities.json"
    assert config.images_dir == Path("output") / "images"


def test_google_cloud_environment_variables():
    env = {"GOOGLE_CLOUD_PROJECT": "my-project", "GOOGLE_CLOUD_LOCATION": "europe-west6"}
    with patch.dict(os.environ, env, clear=True):
        config = Config(_env_file=None)

    assert config.google_cloud_project == "my-project"
    assert config.google_cloud_location == "europe-west6"


def test_prefixed_environment_variables():
    env = {
        "MUNICIPALITY_CRAWLER_BATCH_SIZE": "10",
        "MUNICIPALITY_CRAWLER_OUTPUT_DIR": "/tmp/crawl",
        "MUNICIPALITY_CRAWLER_EXTRACT_FLAG": "false",
    }
    with patch.dict(os.environ, env, clear=True):
        config = Config(_env_file=None)

    assert config.batch_size == 10
    assert config.results_path == Path("/tmp/crawl/municipalities.json")
    assert config.extract_flag is False


def test_reload_config_replaces_instance():
    first = get_config()
    assert get_config() is first
    assert reload_config() is not first
