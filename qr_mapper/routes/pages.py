from flask import Blueprint, render_template

pages_bp = Blueprint('pages', __name__)


@pages_bp.route('/', methods=['GET'])
def home():
    return render_template('home.html')


@pages_bp.route('/admin/scan', methods=['GET'])
def scan():
    return render_template('scan.html')


@pages_bp.route('/unlinked', methods=['GET'])
def unlinked():
    return render_template('unlinked.html')
