from mcda.methods.saw import SAWMethod
from mcda.methods.wp import WPMethod

__all__ = ["SAWMethod", "WPMethod"]
