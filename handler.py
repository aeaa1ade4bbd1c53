from mangum import Mangum
from manifesto.main import app

handler = Mangum(app, lifespan="off")
