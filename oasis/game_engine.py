import logging
import time

import pygame
import taichi as ti

from refractor.config import RenderSettings
from refractor.framebuffer import Framebuffer
from refractor.lighting import ambient_light_intensity, sun_position, is_night
from refractor.renderer import Renderer
from refractor.scene_manager import SceneManager
from oasis.camera import Camera
from oasis.scene_builder import build_static_scene, build_dynamic_scene, frame_light_positions

logger = logging.getLogger(__name__)


class GameEngine:
    """Main game engine combining PyGame and Taichi"""

    def __init__(self, settings=None):
        self.settings = settings or RenderSettings()
        pygame.init()
        self.width = self.settings.width
        self.height = self.settings.height
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("Refractor - Oasis")

        # Initialize Taichi
        ti.init(arch=self.settings.taichi_arch(), default_fp=ti.f32)

        # Create scene manager
        self.scene = SceneManager()
        self.scene.set_static_objects(build_static_scene())
        self.framebuffer = Framebuffer(self.width, self.height)
        self.renderer = Renderer(self.settings)

        # Create camera
        self.camera = Camera((5.0, 5.0, 10.0), (0.0, 2.0, 0.0), (0.0, 1.0, 0.0),
                             move_step=self.settings.move_step)

        # Game state
        self.running = True
        self.sun_angle = 0.0
        self.start_time = time.time()
        self.ambient_intensity = 1.0

        # Performance tracking
        self.frame_times = []
        self.fps = 0
        self.font = pygame.font.SysFont(None, 24)

        print("CPU Raytracing Engine Initialized")
        print(f"Using Taichi backend: {ti.cfg.arch}")
        print(f"Resolution: {self.width}x{self.height}")
        print("Controls:")
        print("  W/S - Move forward/backward")
        print("  Left/Right - Move left/right")
        print("  A/D - Orbit left/right")
        print("  Up/Down - Orbit up/down")
        print("  ESC - Quit")

    def handle_events(self):
        """Handle PyGame events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

    def update_movement(self):
        """Issue camera commands for held keys"""
        keys = pygame.key.get_pressed()
        step = self.settings.rotation_speed

        if keys[pygame.K_w]:
            self.camera.move('forward')
        if keys[pygame.K_s]:
            self.camera.move('backward')
        if keys[pygame.K_LEFT]:
            self.camera.move('left')
        if keys[pygame.K_RIGHT]:
            self.camera.move('right')
        if keys[pygame.K_a]:
            self.camera.orbit(step, 0.0)
        if keys[pygame.K_d]:
            self.camera.orbit(-step, 0.0)
        if keys[pygame.K_UP]:
            self.camera.orbit(0.0, -step)
        if keys[pygame.K_DOWN]:
            self.camera.orbit(0.0, step)

    def update_scene(self):
        """Advance the sun and rebuild the animated geometry"""
        self.sun_angle += self.settings.rotation_speed
        sun = sun_position(self.sun_angle)
        self.ambient_intensity = ambient_light_intensity(sun)

        elapsed_time = time.time() - self.start_time
        self.scene.set_dynamic_objects(build_dynamic_scene(elapsed_time))
        return frame_light_positions(self.scene, sun)

    def render_ui(self, render_time):
        """Render the UI overlay"""
        pixel_array = self.framebuffer.to_numpy()
        surf = pygame.surfarray.make_surface(pixel_array)
        self.screen.blit(surf, (0, 0))

        # Update FPS calculation
        self.frame_times.append(render_time)
        if len(self.frame_times) > 60:
            self.frame_times.pop(0)

        avg_frame_time = sum(self.frame_times) / len(self.frame_times)
        self.fps = 1.0 / avg_frame_time if avg_frame_time > 0 else 0

        texts = [
            f"FPS: {self.fps:.1f}",
            f"Frame Time: {render_time*1000:.1f}ms",
            f"Objects: {self.scene.object_count}",
            f"{'Night' if is_night(self.ambient_intensity) else 'Day'} ({self.ambient_intensity:.2f})",
            "W/S Left/Right: Move  A/D Up/Down: Orbit",
        ]

        for i, text in enumerate(texts):
            text_surf = self.font.render(text, True, (255, 255, 255))
            # Text background for readability
            bg_rect = text_surf.get_rect()
            bg_rect.x = 10
            bg_rect.y = 10 + i * 25
            pygame.draw.rect(self.screen, (0, 0, 0), bg_rect.inflate(10, 5))
            self.screen.blit(text_surf, (15, 12 + i * 25))

    def run(self):
        """Main game loop"""
        logger.info("Starting render loop")
        while self.running:
            self.handle_events()
            self.update_movement()
            light_positions = self.update_scene()

            render_start = time.time()
            self.renderer.render(self.framebuffer, self.scene, self.camera,
                                 light_positions, self.ambient_intensity)
            render_time = time.time() - render_start

            self.render_ui(render_time)
            pygame.display.flip()

            # Fixed delay between frames
            pygame.time.wait(self.settings.frame_delay_ms)

        logger.info("Render loop stopped")
        pygame.quit()
