from nist_sts.presentation.api.v1.nist.router import nist_router

__all__ = [
    'nist_router',
]
