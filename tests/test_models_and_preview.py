"""
Tests for player configuration models and the preview state machine.
"""
import pytest
from pydantic import ValidationError

from services.vsl_player import AspectRatio, PlayerConfig, PreviewPlayer


class TestPlayerConfig:

    def test_defaults(self):
        config = PlayerConfig()
        assert config.display_name == "Nova VSL Sem Título"
        assert config.aspect_ratio is AspectRatio.HORIZONTAL
        assert config.accent_color == "#2563eb"
        assert config.retention_curve_exponent == 0.5
        assert config.content_delay_enabled is False
        assert config.content_delay_seconds == 60

    def test_accepts_camel_case_and_field_names(self):
        by_alias = PlayerConfig(videoUrl="https://x.test/a.mp4", retentionSpeed=0.3)
        by_name = PlayerConfig(video_source="https://x.test/a.mp4", retention_curve_exponent=0.3)
        assert by_alias == by_name

    def test_to_api_uses_aliases(self):
        data = PlayerConfig(ratio="9:16").to_api()
        assert data["ratio"] == "9:16"
        assert set(data) == {
            "name", "videoUrl", "ratio", "primaryColor",
            "retentionSpeed", "hasDelay", "delaySeconds",
        }

    @pytest.mark.parametrize("exponent", [0.0, 0.05, 1.01, -1])
    def test_rejects_exponent_out_of_range(self, exponent):
        with pytest.raises(ValidationError):
            PlayerConfig(retentionSpeed=exponent)

    def test_rejects_unknown_ratio(self):
        with pytest.raises(ValidationError):
            PlayerConfig(ratio="4:3")

    def test_rejects_negative_delay(self):
        with pytest.raises(ValidationError):
            PlayerConfig(delaySeconds=-5)

    def test_rejects_blank_video_source(self):
        with pytest.raises(ValidationError):
            PlayerConfig(videoUrl="   ")

    def test_accepts_any_color_string(self):
        # Normalization happens at generation time
        assert PlayerConfig(primaryColor="blue").accent_color == "blue"

    def test_css_ratio(self):
        assert AspectRatio.VERTICAL.css_ratio == "9/16"
        assert AspectRatio.HORIZONTAL.css_ratio == "16/9"


class TestPreviewPlayer:

    def test_initial_state(self, demo_config):
        player = PreviewPlayer(demo_config)
        state = player.snapshot()
        assert state["overlayVisible"] is True
        assert state["muted"] is True
        assert state["playing"] is True
        assert state["pauseIconVisible"] is False
        assert state["progress"] == 0.0

    def test_video_click_ignored_behind_overlay(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.click_video()
        assert player.playing is True
        assert player.pause_icon_visible is False

    def test_overlay_click_unmutes_and_restarts(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.time_update(12, 100)
        player.click_overlay()
        assert player.overlay_visible is False
        assert player.muted is False
        assert player.current_time == 0.0
        assert player.playing is True

    def test_overlay_stays_dismissed(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.click_overlay()
        player.time_update(30, 100)
        player.click_overlay()
        assert player.current_time == 30

    def test_pause_resume_toggles_icon(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.click_overlay()
        player.click_video()
        assert player.playing is False
        assert player.pause_icon_visible is True
        player.click_video()
        assert player.playing is True
        assert player.pause_icon_visible is False

    def test_progress_follows_curve(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.click_overlay()
        player.time_update(25, 100)
        assert player.progress == pytest.approx(50.0)

    def test_unknown_duration_keeps_progress(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.time_update(25, 100)
        player.time_update(30, None)
        assert player.progress == pytest.approx(50.0)
        assert player.current_time == 25

    def test_play_after_end_restarts_from_zero(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.click_overlay()
        player.time_update(100, 100)
        player.finish()
        player.click_video()
        assert player.playing is True
        assert player.ended is False
        assert player.current_time == 0.0

    def test_resume_after_pause_keeps_position(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.click_overlay()
        player.time_update(40, 100)
        player.click_video()
        player.click_video()
        assert player.current_time == 40

    def test_finish_forces_full_bar_and_hides_icon(self, demo_config):
        player = PreviewPlayer(demo_config)
        player.click_overlay()
        player.click_video()
        player.finish()
        assert player.progress == 100.0
        assert player.pause_icon_visible is False
        assert player.ended is True
