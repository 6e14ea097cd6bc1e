"""
Animation Controller

Manages animation playback state for a skeleton.
"""

import logging
from typing import List, Optional

from ..config.settings import DEFAULT_PLAYBACK_SPEED, DEFAULT_SKIN_NAME
from .animation import Animation
from .pose import Sprite
from .skeleton import Skeleton

logger = logging.getLogger(__name__)


class AnimationController:
    """
    Controls animation playback for a skeleton.

    Manages:
    - Current animation and playback time
    - Play/pause/loop states
    - Evaluating the current sprites

    The skeleton itself is never modified; all playback state lives here.
    """

    def __init__(self, skeleton: Skeleton, skin: str = DEFAULT_SKIN_NAME):
        """
        Initialize animation controller.

        Args:
            skeleton: Skeleton to animate
            skin: Skin used when evaluating sprites

        Raises:
            SkinNotFound: If the skin does not exist
        """
        self.skeleton = skeleton
        self.skin = skeleton.get_skin(skin).name
        self.current_animation: Optional[Animation] = None
        self.current_time: float = 0.0
        self.is_playing: bool = False
        self.loop: bool = True
        self.playback_speed: float = DEFAULT_PLAYBACK_SPEED

    def play(self, animation_name: str, loop: bool = True):
        """
        Start playing an animation.

        Args:
            animation_name: Animation to play
            loop: Whether to loop the animation

        Raises:
            AnimationNotFound: If the animation does not exist
        """
        self.current_animation = self.skeleton.get_animation(animation_name)
        self.current_time = 0.0
        self.is_playing = True
        self.loop = loop
        logger.debug("Playing '%s' (loop=%s)", animation_name, loop)

    def pause(self):
        """Pause animation playback."""
        self.is_playing = False

    def resume(self):
        """Resume animation playback."""
        if self.current_animation is not None:
            self.is_playing = True

    def stop(self):
        """Stop animation and return to the setup pose."""
        self.is_playing = False
        self.current_time = 0.0
        self.current_animation = None

    def set_skin(self, skin: str):
        """
        Raises:
            SkinNotFound: If the skin does not exist
        """
        self.skin = self.skeleton.get_skin(skin).name

    def update(self, delta_time: float):
        """
        Update animation playback.

        Args:
            delta_time: Time elapsed since last frame (seconds)
        """
        if not self.is_playing or self.current_animation is None:
            return

        self.current_time += delta_time * self.playback_speed

        duration = self.current_animation.duration
        if self.current_time >= duration:
            if self.loop and duration > 0.0:
                self.current_time = self.current_time % duration
            else:
                self.current_time = duration
                self.is_playing = False
        elif self.current_time < 0.0:
            # Reverse playback
            if self.loop and duration > 0.0:
                self.current_time = self.current_time % duration
            else:
                self.current_time = 0.0
                self.is_playing = False

    def sprites(self) -> List[Sprite]:
        """Sprites for the current animation state, bottom to top."""
        return self.skeleton.calculate(self.skin, self.current_animation, self.current_time)

    def __repr__(self):
        anim_name = self.current_animation.name if self.current_animation else "None"
        return f"AnimationController(animation='{anim_name}', time={self.current_time:.2f}s, playing={self.is_playing})"
