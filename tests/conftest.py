"""Pytest configuration and shared fixtures."""

import pytest
import taichi as ti

from refractor.config import RenderSettings
from refractor.renderer import Renderer
from refractor.scene_manager import SceneManager


@pytest.fixture(scope="session", autouse=True)
def taichi_cpu():
    """Run every kernel on the CPU backend."""
    ti.init(arch=ti.cpu, default_fp=ti.f32)
    yield
    ti.reset()


@pytest.fixture(scope="session")
def shared_scene(taichi_cpu):
    return SceneManager(max_objects=64, max_materials=16, max_lights=8)


@pytest.fixture
def scene(shared_scene):
    """Empty scene, fields reused across tests to avoid recompiling kernels."""
    shared_scene.reset_scene()
    return shared_scene


@pytest.fixture(scope="session")
def renderer(taichi_cpu):
    return Renderer(RenderSettings())
