import jax
import pytest

# Forcing terms are double precision in the ocean model
jax.config.update('jax_enable_x64', True)

@pytest.fixture(autouse=True)
def clean_timers():
    yield
    from jocn.timers import reset_timers
    reset_timers()
