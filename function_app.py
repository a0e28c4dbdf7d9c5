import azure.functions as func

from tvbingefriend_show_recommender.blueprints import recommendations_bp

app = func.FunctionApp()

app.register_blueprint(recommendations_bp)
