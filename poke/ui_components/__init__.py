from .panels import ListPanel, Panel

__all__ = ["ListPanel", "Panel"]
