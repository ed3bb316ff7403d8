from disle.config import DEFAULT_GLOBAL_CONFIG, Config


def test_defaults(tmp_path):
    path = tmp_path / "empty"
    path.write_text("", encoding="UTF-8")
    config = Config(config=str(path))

    assert config.get_specific_option("global", "command_char") == "/"
    assert config.get_specific_option("global", "reserved_names") == ["ova"]
    assert config.get_specific_option("global", "unknown", "fallback") == "fallback"


def test_section_overrides_global(tmp_path):
    path = tmp_path / "dislerc"
    path.write_text('[global]\ncommand_char = "!"\nlog_level = "debug"\n\n[bot]\ncommand_char = "?"\n',
                    encoding="UTF-8")
    config = Config(config=str(path))

    assert config.get_specific_option("global", "command_char") == "!"
    assert config.get_specific_option("bot", "command_char") == "?"
    assert config.get_specific_option("bot", "log_level") == "debug"
    assert config.get_specific_option("bot", "log_file") == DEFAULT_GLOBAL_CONFIG["log_file"]


def test_reload(tmp_path):
    path = tmp_path / "dislerc"
    path.write_text('[global]\ncommand_char = "!"\n', encoding="UTF-8")
    config = Config(config=str(path))

    path.write_text('[global]\ncommand_char = "#"\n', encoding="UTF-8")
    config.reload()

    assert config.get_specific_option("global", "command_char") == "#"


def test_data_directory_is_created(config, tmp_path):
    path = config.data_directory()

    assert path == tmp_path / "rooms"
    assert path.is_dir()
