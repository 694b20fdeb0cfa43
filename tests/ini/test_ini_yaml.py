import pytest

from inidoc import IniYamlParser, InvalidFileFormatError, loads

TEXT = "top = 1\n\n[db]\nhost = localhost ; primary\nport = 5432\n\n[empty]\n"


def test_yaml_round_trip(tmp_path):
    path = tmp_path / "app.yaml"
    doc = loads(TEXT)

    IniYamlParser(path).write(doc)
    back = IniYamlParser(path).read()

    assert back == doc
    assert back.sections() == ["db", "empty"]
    assert back.get_comment("db", "host") == "primary"


def test_yaml_layout(tmp_path):
    path = tmp_path / "app.yaml"
    IniYamlParser(path).write(loads(TEXT))

    assert path.read_text(encoding="utf-8") == (
        "'':\n"
        "  top: '1'\n"
        "db:\n"
        "  host:\n"
        "    value: localhost\n"
        "    comment: primary\n"
        "  port: '5432'\n"
        "empty: {}\n"
    )


def test_yaml_scalars_as_text(tmp_path):
    path = tmp_path / "typed.yaml"
    path.write_text("net:\n  port: 80\n  ipv6: true\n  alias:\n",
                    encoding="utf-8")

    doc = IniYamlParser(path).read()

    assert doc.get_value("net", "port") == "80"
    assert doc.get_value("net", "ipv6") == "true"
    assert doc.get_value("net", "alias") == ""


def test_yaml_drops_full_line_comments(tmp_path):
    with pytest.warns(UserWarning):
        IniYamlParser(tmp_path / "c.yaml").write(loads("; note\n[a]\nk = v\n"))


def test_yaml_bad_layout(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(InvalidFileFormatError):
        IniYamlParser(path).read()


@pytest.mark.parametrize(
    "text",
    [
        "a:\n  '': v\n",
        "a:\n  ' ': v\n",
        "' a':\n  k: 1\na:\n  k: 2\n",
        "a:\n  x=y: v\n",
        "a:\n  k: \"l1\\nl2\"\n",
        "'a]b':\n  k: v\n",
    ],
)
def test_yaml_bad_entries(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(InvalidFileFormatError) as e:
        IniYamlParser(path).read()
    assert e.value.source_id == str(path)
