from .synthesizer import ResponseSynthesizer
