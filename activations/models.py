"""Model registry entry point for the activations app."""

from activations.infrastructure.models import Activation, ActivationLog  # noqa: F401
