from .events import RenderPass
from .frames import Frame, NodeSprite, LinkSprite
