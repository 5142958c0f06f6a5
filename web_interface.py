from flask import Flask, render_template, request, jsonify
from flask_cors import CORS
import time
import logging
from urllib.parse import quote
from config_manager import get_site_config
from html_fetcher import HtmlFetcher
from agents.vegamovies_agent import VegaMoviesAgent
from models import group_download_links

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, resources={r"/api/*": {"origins": "*"}})
app.jinja_env.filters['urlencode'] = quote

site_config = get_site_config()
vegamovies_agent = None

LIST_SOURCES = ('home', 'search', 'category')


def initialize_agents():
    global vegamovies_agent
    if vegamovies_agent is None:
        fetcher = HtmlFetcher(
            cache_ttl=site_config['cache_ttl'],
            timeout=site_config['request_timeout'],
            rotate_user_agent=site_config['rotate_user_agent'],
        )
        vegamovies_agent = VegaMoviesAgent(
            site_config['base_url'],
            fetcher,
            category_strategy=site_config['category_strategy'],
        )
    return vegamovies_agent


def category_title(slug):
    """'dual-audio/hindi' -> 'Dual audio Hindi'"""
    parts = [part for part in slug.split('/') if part]
    return ' '.join(part[:1].upper() + part[1:].replace('-', ' ') for part in parts)


@app.template_filter('genre_path')
def genre_path(genre):
    return f"/category/{genre.strip().lower().replace(' ', '-')}"


@app.template_filter('player_url')
def player_url(imdb_id):
    return site_config['player_embed_url'].format(imdb_id=imdb_id)


@app.context_processor
def inject_site():
    return {'site_name': site_config['site_name']}


@app.route('/')
def index():
    agent = initialize_agents()
    categories = agent.get_categories()
    movies = agent.get_homepage_movies(1)
    return render_template(
        'index.html',
        categories=categories,
        movies=movies,
        list_source='home',
        list_params={},
    )


@app.route('/search')
def search():
    query = request.args.get('q', '').strip()
    movies = []
    if query:
        logger.info(f"Searching for: {query}")
        movies = initialize_agents().get_search_results(query, 1)
    return render_template(
        'listing.html',
        heading=f'Results for "{query}"' if query else 'Search',
        page_title=query or 'Search',
        query=query,
        movies=movies,
        list_source='search',
        list_params={'q': query},
    )


@app.route('/category/<path:slug>')
def category(slug):
    title = category_title(slug)
    movies = initialize_agents().get_category_movies(slug, 1)
    return render_template(
        'listing.html',
        heading=f'Category: {title}',
        page_title=title or 'Category Not Found',
        query=None,
        movies=movies,
        list_source='category',
        list_params={'path': slug},
    )


@app.route('/movie/<path:slug>')
def movie_details(slug):
    agent = initialize_agents()
    details = agent.get_movie_details(slug)
    if details is None:
        return render_template('404.html', page_title='Not Found'), 404

    return render_template(
        'movie.html',
        details=details,
        grouped_links=group_download_links(details.download_links),
        recent_posts=agent.get_recent_posts(),
        movie_path=slug,
    )


@app.route('/api/movies')
def api_movies():
    """Next page of a listing, used by the "Load More" button"""
    source = request.args.get('source', 'home')
    if source not in LIST_SOURCES:
        return jsonify({'error': f'Unknown source: {source}'}), 400

    try:
        page = int(request.args.get('page', 1))
    except ValueError:
        return jsonify({'error': 'Page must be a number'}), 400
    if page < 1:
        return jsonify({'error': 'Page must be 1 or greater'}), 400

    agent = initialize_agents()
    if source == 'search':
        query = request.args.get('q', '').strip()
        if not query:
            return jsonify({'error': 'Search query is required'}), 400
        movies = agent.get_search_results(query, page)
    elif source == 'category':
        path = request.args.get('path', '').strip()
        if not path:
            return jsonify({'error': 'Category path is required'}), 400
        movies = agent.get_category_movies(path, page)
    else:
        movies = agent.get_homepage_movies(page)

    return jsonify({
        'success': True,
        'page': page,
        'movies': [movie.to_dict() for movie in movies],
        'has_more': len(movies) > 0
    })


@app.route('/api/categories')
def api_categories():
    categories = initialize_agents().get_categories()
    return jsonify({'categories': [category.to_dict() for category in categories]})


@app.route('/api/recent_posts')
def api_recent_posts():
    posts = initialize_agents().get_recent_posts()
    return jsonify({'posts': [post.to_dict() for post in posts]})


@app.route('/health')
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'vegamovies_agent_initialized': vegamovies_agent is not None,
        'base_url': site_config['base_url'],
        'cached_pages': vegamovies_agent.fetcher.cache_size() if vegamovies_agent else 0,
        'timestamp': time.time()
    })


@app.errorhandler(404)
def page_not_found(error):
    return render_template('404.html', page_title='Not Found'), 404


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=8080)
