"""Core Module

Module Structure:
    - cognito/          : User pool orchestration over a callback-style
                          identity provider (invoker, pool, provider, models)

Usage Pattern:
    Import explicitly when needed:
        from userpool.core.cognito import CognitoUserPool, BotoIdentityProvider
"""
