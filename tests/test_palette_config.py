from survey_app.core import palette_config
from survey_app.core.config import MISSING_ANSWER_COLOR, QUALITATIVE_PALETTE, SEQUENTIAL_PALETTE


def test_palettes_load(monkeypatch):
    monkeypatch.setattr(palette_config, "_CACHE", None)
    palettes = palette_config.load_palettes()
    assert palettes["qualitative"] == tuple(QUALITATIVE_PALETTE)
    assert palettes["sequential"] == tuple(SEQUENTIAL_PALETTE)
    assert palette_config.missing_answer_color() == MISSING_ANSWER_COLOR


def test_palette_overrides_from_yaml(monkeypatch, tmp_path):
    monkeypatch.setattr(palette_config, "_CACHE", None)
    (tmp_path / "palettes.yaml").write_text(
        "palettes:\n  sequential: ['#000', '#111']\n  missing: '#eee'\n"
    )
    palettes = palette_config.load_palettes(tmp_path)
    assert palettes["sequential"] == ("#000", "#111")
    assert palettes["missing"] == ("#eee",)
    # untouched palettes fall back to defaults
    assert palettes["qualitative"] == tuple(QUALITATIVE_PALETTE)


def test_malformed_palette_file_falls_back(monkeypatch, tmp_path):
    monkeypatch.setattr(palette_config, "_CACHE", None)
    (tmp_path / "palettes.yaml").write_text("palettes: [unclosed\n")
    palettes = palette_config.load_palettes(tmp_path)
    assert palettes["sequential"] == tuple(SEQUENTIAL_PALETTE)


def test_missing_palette_file_uses_defaults(monkeypatch, tmp_path):
    monkeypatch.setattr(palette_config, "_CACHE", None)
    palettes = palette_config.load_palettes(tmp_path)
    assert palettes["multiple_choice"] == (palette_config.multiple_choice_color(),)
