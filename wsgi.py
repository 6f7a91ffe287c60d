from drivehub import create_app

app = create_app()
