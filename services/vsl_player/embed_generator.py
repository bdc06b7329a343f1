"""
Embed Code Generator
Turns a PlayerConfig into a standalone HTML/CSS/JS snippet that reproduces
the editor preview: muted autoplay, click-to-unmute overlay, pulsing pause
icon and a progress bar driven by the retention curve.
"""
import re
import uuid
from string import Template
from typing import Callable, Dict, Optional

from loguru import logger

from config import settings

from .curve import DISPLAY_PERCENT_JS
from .markup import attribute_url, escape_html, normalize_accent_color
from .models import PlayerConfig


MAX_WIDTH_VERTICAL = "400px"
MAX_WIDTH_HORIZONTAL = "900px"

_INSTANCE_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

# Install instructions wrapped around the code block, per locale
COPY: Dict[str, Dict[str, str]] = {
    "pt": {
        "preamble": (
            "=== PROMPT PARA IA / DESENVOLVEDOR ===\n\n"
            "OBJETIVO: Inserir o player de vídeo de alta conversão (VSL) abaixo no site.\n\n"
            "LOCALIZAÇÃO DESEJADA:\n"
            "[ !!! INSIRA AQUI O LOCAL ONDE O VÍDEO DEVE APARECER !!! ]\n\n"
            "INSTRUÇÕES TÉCNICAS:\n"
            "1. Copie o bloco de código abaixo integralmente.\n"
            "2. Cole-o como um elemento \"HTML Personalizado\" ou \"Embed Code\"."
        ),
        "delay": (
            "3. Conteúdo com atraso: revele os elementos ocultos da página após "
            "$seconds segundos (valor no atributo data-content-delay do player)."
        ),
        "code_start": "--- CÓDIGO DO PLAYER VORTEX ---",
        "code_end": "--- FIM DO CÓDIGO ---",
        "footer": (
            "OBSERVAÇÃO: cada cópia deste código cria um player independente, "
            "então é seguro usar mais de um player na mesma página."
        ),
        "cta": "🔊 CLIQUE PARA OUVIR",
    },
    "en": {
        "preamble": (
            "=== PROMPT FOR AI / DEVELOPER ===\n\n"
            "GOAL: Insert the high-conversion video player (VSL) below into the site.\n\n"
            "TARGET LOCATION:\n"
            "[ !!! DESCRIBE HERE WHERE THE VIDEO SHOULD APPEAR !!! ]\n\n"
            "TECHNICAL INSTRUCTIONS:\n"
            "1. Copy the whole code block below.\n"
            "2. Paste it as a \"Custom HTML\" or \"Embed Code\" element."
        ),
        "delay": (
            "3. Delayed content: reveal the page's hidden elements after "
            "$seconds seconds (value in the player's data-content-delay attribute)."
        ),
        "code_start": "--- VORTEX PLAYER CODE ---",
        "code_end": "--- END OF CODE ---",
        "footer": (
            "NOTE: every copy of this code creates an independent player, "
            "so it is safe to use more than one player on the same page."
        ),
        "cta": "🔊 CLICK TO LISTEN",
    },
}


PLAYER_TEMPLATE = Template("""<div id="$container_id"$delay_attr style="position: relative; width: 100%; max-width: $max_width; margin: 20px auto; aspect-ratio: $css_ratio; background: #000; border-radius: 15px; overflow: hidden; box-shadow: 0 15px 35px rgba(0,0,0,0.5); font-family: sans-serif;">
    <!-- Project: $display_name -->
    <style>
        @keyframes $pulse_name {
            0% { transform: translate(-50%, -50%) scale(1); box-shadow: 0 0 0 0 ${color}66; }
            70% { transform: translate(-50%, -50%) scale(1.08); box-shadow: 0 0 0 20px ${color}00; }
            100% { transform: translate(-50%, -50%) scale(1); box-shadow: 0 0 0 0 ${color}00; }
        }
        #$container_id [data-vsl-role="pause-icon"] { animation: $pulse_name 1.6s ease-out infinite; }
    </style>

    <video data-vsl-role="video" autoplay muted playsinline style="width: 100%; height: 100%; object-fit: cover; cursor: pointer;">
        <source src="$video_url" type="video/mp4">
    </video>

    <div data-vsl-role="overlay" style="position: absolute; top: 0; left: 0; width: 100%; height: 100%; background: rgba(0,0,0,0.4); display: flex; align-items: center; justify-content: center; cursor: pointer; z-index: 30;">
        <div style="background: $color; color: white; padding: 15px 25px; border-radius: 50px; font-weight: bold; font-size: 16px; box-shadow: 0 4px 15px ${color}66;">
            $cta
        </div>
    </div>

    <div data-vsl-role="pause-icon" style="display: none; position: absolute; top: 50%; left: 50%; transform: translate(-50%, -50%); width: 80px; height: 80px; border-radius: 50%; background: ${color}cc; align-items: center; justify-content: center; z-index: 20; pointer-events: none;">
        <div style="margin-left: 6px; width: 0; height: 0; border-top: 15px solid transparent; border-bottom: 15px solid transparent; border-left: 25px solid #fff;"></div>
    </div>

    <div data-vsl-role="progress-track" style="position: absolute; bottom: 0; left: 0; width: 100%; height: 12px; background: rgba(255,255,255,0.2); z-index: 25;">
        <div data-vsl-role="progress-bar" style="width: 0%; height: 100%; background: $color; transition: width 0.1s linear;"></div>
    </div>
</div>

<script>
    (function() {
        var container = document.getElementById('$container_id');
        if (!container) return;
        var video = container.querySelector('[data-vsl-role="video"]');
        var overlay = container.querySelector('[data-vsl-role="overlay"]');
        var pauseIcon = container.querySelector('[data-vsl-role="pause-icon"]');
        var progressBar = container.querySelector('[data-vsl-role="progress-bar"]');
        var exponent = $exponent;
        var unlocked = false;

        $display_percent_js

        function showPauseIcon(visible) {
            pauseIcon.style.display = visible ? 'flex' : 'none';
        }

        video.addEventListener('timeupdate', function() {
            var duration = video.duration;
            if (!duration || !isFinite(duration)) return;
            progressBar.style.width = computeDisplayPercent(video.currentTime / duration, exponent) + '%';
        });

        video.addEventListener('ended', function() {
            progressBar.style.width = '100%';
            showPauseIcon(false);
        });

        overlay.addEventListener('click', function() {
            unlocked = true;
            video.muted = false;
            video.currentTime = 0;
            video.play();
            overlay.style.display = 'none';
        });

        video.addEventListener('click', function() {
            if (!unlocked) return;
            if (video.paused) {
                video.play();
                showPauseIcon(false);
            } else {
                video.pause();
                showPauseIcon(true);
            }
        });
    })();
</script>""")


def random_instance_id() -> str:
    """Short random id used to scope one embedded player."""
    return uuid.uuid4().hex[:8]


class EmbedGenerator:
    """
    Builds the copy-paste snippet for a player configuration.

    The instance id comes from ``id_factory`` unless given explicitly, so
    tests can pin it and get byte-identical output.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None, locale: Optional[str] = None):
        locale = locale or settings.DEFAULT_LOCALE
        if locale not in COPY:
            raise ValueError(f"Unsupported locale: {locale}")
        self.id_factory = id_factory or random_instance_id
        self.locale = locale
        self.copy = COPY[locale]

    def render_player(self, config: PlayerConfig, instance_id: Optional[str] = None) -> str:
        """Render only the embeddable markup, style and script."""
        instance_id = instance_id or self.id_factory()
        if not _INSTANCE_ID.match(instance_id):
            raise ValueError(f"Invalid instance id: {instance_id!r}")
        container_id = f"vsl-{instance_id}"
        color = normalize_accent_color(config.accent_color)

        if config.content_delay_enabled:
            delay_attr = f' data-content-delay="{config.content_delay_seconds}"'
        else:
            delay_attr = ""

        return PLAYER_TEMPLATE.substitute(
            container_id=container_id,
            pulse_name=f"{container_id}-pulse",
            delay_attr=delay_attr,
            max_width=MAX_WIDTH_VERTICAL if config.aspect_ratio.is_vertical else MAX_WIDTH_HORIZONTAL,
            css_ratio=config.aspect_ratio.css_ratio,
            display_name=escape_html(config.display_name),
            video_url=attribute_url(config.video_source),
            color=color,
            cta=self.copy["cta"],
            exponent=repr(float(config.retention_curve_exponent)),
            display_percent_js=DISPLAY_PERCENT_JS,
        )

    def generate(self, config: PlayerConfig, instance_id: Optional[str] = None) -> str:
        """Full copy-paste text: instructions, delimited code block, footer."""
        player = self.render_player(config, instance_id=instance_id)

        preamble = self.copy["preamble"]
        if config.content_delay_enabled:
            delay_line = Template(self.copy["delay"]).substitute(seconds=config.content_delay_seconds)
            preamble = f"{preamble}\n{delay_line}"

        logger.debug(f"Generated embed code for '{config.display_name}' ({config.aspect_ratio.value})")

        return "\n\n".join([
            preamble,
            self.copy["code_start"],
            player,
            self.copy["code_end"],
            self.copy["footer"],
        ])


def generate_embed_code(
    config: PlayerConfig,
    instance_id: Optional[str] = None,
    locale: Optional[str] = None,
) -> str:
    """Generate the full embed text with a fresh generator."""
    return EmbedGenerator(locale=locale).generate(config, instance_id=instance_id)
