from school_erp import create_app
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = create_app()

if __name__ == '__main__':
    # Port from the command line overrides PORT from the environment
    port = int(sys.argv[1]) if len(sys.argv) > 1 else app.config['PORT']
    debug = app.config['DEBUG']

    app.run(debug=debug, host=app.config['HOST'], port=port, use_reloader=debug)
